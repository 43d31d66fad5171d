from abc import ABC, abstractmethod

from egghunt.app.repositories.session_repository import ISessionRepository
from egghunt.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    sessions: ISessionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        """Commit pending changes"""
        pass

    @abstractmethod
    async def rollback(self):
        pass
