from abc import ABC, abstractmethod
from typing import List, Optional

from egghunt.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_all(self) -> List[Session]:
        """Get all sessions, newest first"""
        pass

    @abstractmethod
    async def get_active(self) -> List[Session]:
        """Get all active, non-expired sessions, newest first"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: int) -> List[Session]:
        """Get all sessions for a user, newest first"""
        pass

    @abstractmethod
    async def get_by_id(self, session_id: str) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: int) -> Optional[Session]:
        """Get the most recently created active, non-expired session for a user"""
        pass

    @abstractmethod
    async def add(self, session: Session) -> Session:
        """Add a new session"""
        pass

    @abstractmethod
    async def update(self, session: Session) -> Session:
        """Update existing session"""
        pass

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """Delete a session. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def deactivate_all_by_user_id(self, user_id: int) -> int:
        """Deactivate all active sessions for a user, keeping the rows. Returns count."""
        pass

    @abstractmethod
    async def delete_all_by_user_id(self, user_id: int) -> int:
        """Delete all sessions for a user (data removal). Returns count."""
        pass

    @abstractmethod
    async def delete_expired(self) -> int:
        """Delete every session with expires_at <= now in one statement. Returns count."""
        pass

    @abstractmethod
    async def exists(self, session_id: str) -> bool:
        """Check whether a session with this ID exists"""
        pass
