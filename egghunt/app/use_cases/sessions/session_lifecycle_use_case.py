"""
Session Lifecycle Use Case

Create, check, extend and end login sessions for the authentication layer.
"""

import logging
from typing import List, Optional

from egghunt.libs.result import Error, Result, Return
from egghunt.app.services.unit_of_work import UnitOfWork
from egghunt.domain.entities import Session, SessionTermination
from egghunt.domain.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_REMEMBER_ME_DAYS = 30
DEFAULT_SESSION_HOURS = 8


def _blank(session_id: Optional[str]) -> bool:
    return session_id is None or not session_id.strip()


def _invalid_session_id() -> Result:
    return Return.err(Error("INVALID_SESSION_ID", "Session ID must not be empty"))


def _session_not_found() -> Result:
    return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))


class SessionLifecycleUseCase:
    """
    Use case for the lifecycle of login sessions.

    Business Rules:
    - remember_me selects the long window, otherwise the short one
    - A session is usable only while Session.is_valid() holds, checked fresh
    - Ending a missing session is not an error
    - Ending all sessions of a user either deactivates (rows kept) or
      erases (rows deleted); the caller has to pick one
    - Store errors propagate to the caller
    """

    def __init__(
        self,
        uow: UnitOfWork,
        remember_me_days: float = DEFAULT_REMEMBER_ME_DAYS,
        default_session_hours: float = DEFAULT_SESSION_HOURS,
    ):
        self.uow = uow
        self.remember_me_days = remember_me_days
        self.default_session_hours = default_session_hours

    async def start_session(self, user_id: int, remember_me: bool = False) -> Result[Session]:
        """
        Start a session on login.

        Args:
            user_id: Logged in user
            remember_me: Long-lived session instead of a working-day one

        Returns:
            Result with the persisted Session, or Error USER_NOT_FOUND
        """
        if remember_me:
            expiration_days = self.remember_me_days
        else:
            expiration_days = self.default_session_hours / 24

        return await self.create_session(user_id, expiration_days)

    async def create_session(
        self, user_id: int, expiration_days: float = DEFAULT_REMEMBER_ME_DAYS
    ) -> Result[Session]:
        """Create and persist a session with an explicit window in days"""
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            session = Session.create(user_id, expiration_days)
            await self.uow.sessions.add(session)
            await self.uow.commit()

            logger.info(f"Session {session.id} created for user {user_id}, expires at {session.expires_at}")
            return Return.ok(session)

    async def check_session(self, session_id: str) -> Result[Session]:
        """
        Load a session and check that it is still valid.

        Returns:
            Result with the Session, or Error SESSION_NOT_FOUND / SESSION_INVALID
        """
        if _blank(session_id):
            return _invalid_session_id()

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return _session_not_found()

            if not session.is_valid():
                return Return.err(Error("SESSION_INVALID", "Session is inactive or expired"))

            # End the read transaction so the exit rollback does not expire the entity
            await self.uow.commit()
            return Return.ok(session)

    async def validate_session(self, session_id: str) -> bool:
        result = await self.check_session(session_id)
        return result.is_ok()

    async def get_session(self, session_id: str) -> Result[Optional[Session]]:
        """Get a session regardless of validity; value is None when missing"""
        if _blank(session_id):
            return _invalid_session_id()

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            await self.uow.commit()
            return Return.ok(session)

    async def get_user_sessions(self, user_id: int) -> Result[List[Session]]:
        async with self.uow:
            sessions = await self.uow.sessions.get_by_user_id(user_id)
            await self.uow.commit()
            return Return.ok(sessions)

    async def get_active_session_for_user(self, user_id: int) -> Result[Optional[Session]]:
        async with self.uow:
            session = await self.uow.sessions.get_active_by_user_id(user_id)
            await self.uow.commit()
            return Return.ok(session)

    async def extend_session(self, session_id: str, days: float) -> Result[Session]:
        """Push expires_at forward by days from its current value"""
        if _blank(session_id):
            return _invalid_session_id()

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return _session_not_found()

            session.extend(days)
            await self.uow.sessions.update(session)
            await self.uow.commit()

            logger.info(f"Session {session_id} extended by {days} day(s)")
            return Return.ok(session)

    async def deactivate_session(self, session_id: str) -> Result[Session]:
        if _blank(session_id):
            return _invalid_session_id()

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return _session_not_found()

            session.deactivate()
            await self.uow.sessions.update(session)
            await self.uow.commit()

            logger.info(f"Session {session_id} deactivated")
            return Return.ok(session)

    async def update_session_data(self, session_id: str, data: Optional[str]) -> Result[Session]:
        """Replace the opaque data blob; None is rejected, empty string is kept"""
        if _blank(session_id):
            return _invalid_session_id()

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return _session_not_found()

            try:
                session.update_data(data)
            except InvalidArgumentError as e:
                return Return.err(Error("INVALID_ARGUMENT", str(e)))

            await self.uow.sessions.update(session)
            await self.uow.commit()
            return Return.ok(session)

    async def end_session(self, session_id: str) -> Result[dict]:
        """
        Delete a session (logout).

        Returns:
            Result with {"session_id", "deleted"}; deleted is False when the
            session was already gone
        """
        if _blank(session_id):
            return _invalid_session_id()

        async with self.uow:
            deleted = await self.uow.sessions.delete(session_id)
            await self.uow.commit()

            if not deleted:
                logger.debug(f"Session {session_id} already gone")
            return Return.ok({"session_id": session_id, "deleted": deleted})

    async def end_all_sessions_for_user(
        self, user_id: int, termination: SessionTermination
    ) -> Result[dict]:
        """
        End every session of a user.

        Args:
            user_id: Owner of the sessions
            termination: deactivate for "log out everywhere", erase for
                data removal requests

        Returns:
            Result with {"user_id", "termination", "count"}
        """
        try:
            termination = SessionTermination(termination)
        except ValueError:
            return Return.err(
                Error("INVALID_TERMINATION", f"Unknown termination mode: {termination}")
            )

        async with self.uow:
            if termination == SessionTermination.deactivate:
                count = await self.uow.sessions.deactivate_all_by_user_id(user_id)
            else:
                count = await self.uow.sessions.delete_all_by_user_id(user_id)

            await self.uow.commit()

            logger.info(f"{termination.value}: {count} session(s) of user {user_id}")
            return Return.ok(
                {"user_id": user_id, "termination": termination.value, "count": count}
            )
