"""
Session Domain Entities

Each entity in its own file.
"""

from .enums import SessionTermination

from .user import User
from .session import Session

__all__ = [
    # Enums
    "SessionTermination",
    # Entities
    "User",
    "Session",
]
