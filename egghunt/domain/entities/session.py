"""
Session Entity

Time-bounded login session owned by a user.
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from egghunt.domain.base import generate_uuid, utcnow
from egghunt.domain.errors import InvalidArgumentError

DEFAULT_EXPIRATION_DAYS = 30
EMPTY_DATA = "{}"


class Session(SQLModel, table=True):
    """
    Session entity - one login of one user.

    Business Rules:
    - Valid only while active AND not past expires_at (recomputed per call)
    - Extensions add to the current expires_at, so they compound
    - Deactivation is one-way and idempotent
    - data is opaque to the entity, stored and returned verbatim
    - Zero or negative windows are allowed to build pre-expired sessions
    """

    __tablename__ = "sessions"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=36)

    user_id: int = Field(foreign_key="users.id", nullable=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime, nullable=False))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    is_active: bool = Field(default=True)
    data: str = Field(default=EMPTY_DATA)

    __table_args__ = (
        Index("idx_session_user_id", "user_id"),
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_created_at", "created_at"),
    )

    @classmethod
    def create(cls, user_id: int, expiration_days: float = DEFAULT_EXPIRATION_DAYS) -> "Session":
        """
        Start a new session for a user.

        Args:
            user_id: Owning user
            expiration_days: Lifetime in days, fractions allowed (8 hours = 1/3)

        Returns:
            Active session with a fresh id and an empty data object
        """
        now = utcnow()
        return cls(
            id=generate_uuid(),
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(days=expiration_days),
            is_active=True,
            data=EMPTY_DATA,
        )

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """True while the session is active and not yet expired"""
        return self.is_active and (now or utcnow()) < self.expires_at

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """In-memory form of the cleanup condition; delete_expired runs it as SQL"""
        return (now or utcnow()) >= self.expires_at

    def extend(self, days: float) -> None:
        self.expires_at = self.expires_at + timedelta(days=days)

    def deactivate(self) -> None:
        self.is_active = False

    def update_data(self, data: Optional[str]) -> None:
        if data is None:
            raise InvalidArgumentError("data", "session data must not be None")
        self.data = data
