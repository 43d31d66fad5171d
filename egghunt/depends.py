from contextlib import asynccontextmanager

from fastapi import Depends
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from egghunt.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from egghunt.app.services.unit_of_work import UnitOfWork
from egghunt.app.use_cases.sessions import SessionLifecycleUseCase

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@asynccontextmanager
async def unit_of_work_scope():
    """Unit of work with its own database session, for background jobs"""
    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            yield uow


async def get_session_lifecycle(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> SessionLifecycleUseCase:
    return SessionLifecycleUseCase(
        uow,
        remember_me_days=ApplicationConfig.SESSION_REMEMBER_ME_DAYS,
        default_session_hours=ApplicationConfig.SESSION_DEFAULT_HOURS,
    )
