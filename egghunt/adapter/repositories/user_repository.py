from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from egghunt.app.repositories.user_repository import IUserRepository
from egghunt.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def add(self, user: User) -> User:
        """Add a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
