from typing import List, Optional

from sqlalchemy import delete
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from egghunt.app.repositories.session_repository import ISessionRepository
from egghunt.domain.base import utcnow
from egghunt.domain.entities import Session


def _require_id(session_id: str) -> None:
    if not session_id:
        raise ValueError("session_id must not be empty")


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> List[Session]:
        stmt = select(Session).order_by(Session.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_active(self) -> List[Session]:
        stmt = (
            select(Session)
            .where(Session.is_active == True, Session.expires_at > utcnow())
            .order_by(Session.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_user_id(self, user_id: int) -> List[Session]:
        stmt = (
            select(Session)
            .where(Session.user_id == user_id)
            .order_by(Session.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_id(self, session_id: str) -> Optional[Session]:
        """Get session by ID"""
        _require_id(session_id)
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_user_id(self, user_id: int) -> Optional[Session]:
        """Most recently created active, non-expired session for a user"""
        stmt = (
            select(Session)
            .where(
                Session.user_id == user_id,
                Session.is_active == True,
                Session.expires_at > utcnow(),
            )
            .order_by(Session.created_at.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def add(self, session_obj: Session) -> Session:
        """Add a new session"""
        if session_obj is None:
            raise ValueError("session must not be None")
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def update(self, session_obj: Session) -> Session:
        """Update existing session"""
        if session_obj is None:
            raise ValueError("session must not be None")
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def delete(self, session_id: str) -> bool:
        """Delete a session by ID"""
        _require_id(session_id)
        session_obj = await self.session.get(Session, session_id)
        if session_obj is None:
            return False

        await self.session.delete(session_obj)
        await self.session.flush()
        return True

    async def deactivate_all_by_user_id(self, user_id: int) -> int:
        """Deactivate all active sessions for a user, rows are kept"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, Session.is_active == True)
            .values(is_active=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_all_by_user_id(self, user_id: int) -> int:
        """Delete all sessions for a user"""
        stmt = delete(Session).where(Session.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self) -> int:
        """
        Delete every session whose expires_at has passed.

        A single DELETE statement, so concurrent readers either see a row
        or they don't. Nothing is visible to others until the caller commits.
        """
        stmt = delete(Session).where(Session.expires_at <= utcnow())
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def exists(self, session_id: str) -> bool:
        _require_id(session_id)
        stmt = select(Session.id).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.first() is not None
