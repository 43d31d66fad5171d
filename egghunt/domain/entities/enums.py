"""
Session Domain Enums
"""

from enum import Enum


class SessionTermination(str, Enum):
    """How all sessions of a user are ended"""

    # Log out everywhere, rows kept for history
    deactivate = "deactivate"
    # Data removal request, rows deleted
    erase = "erase"
