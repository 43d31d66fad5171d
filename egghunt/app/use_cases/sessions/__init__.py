"""
Session Use Cases

Login session lifecycle for the authentication layer.
"""

from .session_lifecycle_use_case import SessionLifecycleUseCase

__all__ = [
    "SessionLifecycleUseCase",
]
