"""
Use Cases

Organized into domain folders:
- sessions/: Login session lifecycle
"""

from .sessions import SessionLifecycleUseCase

__all__ = [
    # Sessions
    "SessionLifecycleUseCase",
]
