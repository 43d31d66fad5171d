"""
Integration tests for the read side of SessionLifecycleUseCase against SQLite

Each use case gets its own AsyncSession, the way get_unit_of_work hands
one out per request, and the returned entities are read after the call
returns, the way the routes build their responses.
"""

from datetime import timedelta

import pytest
import pytest_asyncio

from egghunt.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from egghunt.app.use_cases.sessions import SessionLifecycleUseCase
from egghunt.domain.base import utcnow
from egghunt.domain.entities import Session


@pytest_asyncio.fixture
async def lifecycle(session_factory):
    async with session_factory() as db:
        yield SessionLifecycleUseCase(SqlAlchemyUnitOfWork(db))


async def _stored(db_session, *sessions):
    for session in sessions:
        db_session.add(session)
    await db_session.commit()
    return sessions[0]


@pytest.mark.asyncio
async def test_check_session_entity_is_readable(lifecycle, db_session, user):
    stored = Session.create(user.id, expiration_days=7)
    stored.update_data('{"hunt": 3}')
    await _stored(db_session, stored)

    result = await lifecycle.check_session(stored.id)

    assert result.is_ok()
    session = result.value
    assert session.id == stored.id
    assert session.user_id == user.id
    assert session.expires_at == stored.expires_at
    assert session.data == '{"hunt": 3}'
    assert session.is_active is True
    assert session.is_valid()


@pytest.mark.asyncio
async def test_check_session_twice_in_one_unit_of_work_session(lifecycle, db_session, user):
    stored = await _stored(db_session, Session.create(user.id))

    first = await lifecycle.check_session(stored.id)
    second = await lifecycle.check_session(stored.id)

    assert first.value.id == second.value.id == stored.id
    assert await lifecycle.validate_session(stored.id) is True


@pytest.mark.asyncio
async def test_start_then_check_session_on_same_connection(lifecycle, user):
    started = await lifecycle.start_session(user.id)
    checked = await lifecycle.check_session(started.value.id)

    assert checked.is_ok()
    assert checked.value.user_id == user.id
    assert checked.value.is_valid()


@pytest.mark.asyncio
async def test_check_then_extend_session(lifecycle, db_session, user):
    stored = await _stored(db_session, Session.create(user.id, expiration_days=1))

    checked = await lifecycle.check_session(stored.id)
    extended = await lifecycle.extend_session(stored.id, 2)

    assert extended.is_ok()
    assert checked.value.expires_at - checked.value.created_at == timedelta(days=3)


@pytest.mark.asyncio
async def test_get_session_returns_readable_inactive_session(lifecycle, db_session, user):
    stored = Session.create(user.id)
    stored.deactivate()
    await _stored(db_session, stored)

    result = await lifecycle.get_session(stored.id)

    assert result.is_ok()
    assert result.value.id == stored.id
    assert result.value.is_active is False
    assert result.value.is_valid() is False


@pytest.mark.asyncio
async def test_get_session_missing_is_none(lifecycle, user):
    result = await lifecycle.get_session("no-such-session")

    assert result.is_ok()
    assert result.value is None


@pytest.mark.asyncio
async def test_get_user_sessions_are_readable(lifecycle, db_session, user):
    now = utcnow()
    older = Session.create(user.id)
    older.created_at = now - timedelta(minutes=2)
    newer = Session.create(user.id, expiration_days=-1)
    newer.created_at = now - timedelta(minutes=1)
    await _stored(db_session, older, newer)

    result = await lifecycle.get_user_sessions(user.id)

    assert result.is_ok()
    assert [s.id for s in result.value] == [newer.id, older.id]
    assert [s.is_valid() for s in result.value] == [False, True]
    assert all(s.data == "{}" for s in result.value)


@pytest.mark.asyncio
async def test_get_active_session_for_user_is_readable(lifecycle, db_session, user):
    valid = Session.create(user.id)
    inactive = Session.create(user.id)
    inactive.deactivate()
    await _stored(db_session, valid, inactive)

    result = await lifecycle.get_active_session_for_user(user.id)

    assert result.is_ok()
    assert result.value.id == valid.id
    assert result.value.user_id == user.id
    assert result.value.is_valid()


@pytest.mark.asyncio
async def test_get_active_session_for_user_without_sessions(lifecycle, user):
    result = await lifecycle.get_active_session_for_user(user.id)

    assert result.is_ok()
    assert result.value is None
