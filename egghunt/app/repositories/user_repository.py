from abc import ABC, abstractmethod
from typing import Optional

from egghunt.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def add(self, user: User) -> User:
        """Add a new user"""
        pass
