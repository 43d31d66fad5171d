import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.users = MagicMock()
    uow.sessions = MagicMock()
    return uow


@pytest.fixture
def uow_factory(mock_uow):
    """Factory handing out the same mocked unit of work on every call"""
    return lambda: mock_uow
