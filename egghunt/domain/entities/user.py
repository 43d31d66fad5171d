"""
User Entity

Employee or admin who owns login sessions.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from egghunt.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - owner of sessions.

    Only the columns the session subsystem relies on.
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, index=True)
    is_active: bool = Field(default=True)

    # Timestamps
    first_seen: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_seen: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
