"""
Unit tests for Session entity
"""

from datetime import timedelta

import pytest

from egghunt.domain.base import utcnow
from egghunt.domain.entities import Session
from egghunt.domain.errors import InvalidArgumentError


def test_create_sets_defaults():
    before = utcnow()
    session = Session.create(user_id=7)
    after = utcnow()

    assert session.id
    assert session.user_id == 7
    assert session.is_active is True
    assert session.data == "{}"
    assert before <= session.created_at <= after
    assert session.expires_at - session.created_at == timedelta(days=30)


def test_create_with_custom_window():
    session = Session.create(user_id=1, expiration_days=7)

    assert session.expires_at - session.created_at == timedelta(days=7)


def test_create_with_fractional_days():
    session = Session.create(user_id=1, expiration_days=8 / 24)

    assert abs((session.expires_at - session.created_at) - timedelta(hours=8)) < timedelta(seconds=1)


def test_create_generates_unique_ids():
    ids = {Session.create(user_id=1).id for _ in range(100)}

    assert len(ids) == 100


def test_create_with_negative_days_is_pre_expired():
    """Negative windows are accepted and produce an already expired session"""
    session = Session.create(user_id=1, expiration_days=-1)

    assert session.is_active is True
    assert session.is_valid() is False
    assert session.is_expired() is True


def test_create_with_zero_days_is_not_valid():
    session = Session.create(user_id=1, expiration_days=0)

    assert session.is_valid() is False


def test_new_session_is_valid():
    session = Session.create(user_id=1)

    assert session.is_valid() is True
    assert session.is_expired() is False


def test_is_valid_matches_active_and_expiry():
    session = Session.create(user_id=1, expiration_days=1)

    assert session.is_valid(now=session.expires_at - timedelta(microseconds=1)) is True
    assert session.is_valid(now=session.expires_at) is False
    assert session.is_valid(now=session.expires_at + timedelta(seconds=1)) is False


def test_is_valid_is_recomputed_on_every_call():
    session = Session.create(user_id=1)
    assert session.is_valid() is True

    session.expires_at = utcnow() - timedelta(seconds=1)

    assert session.is_valid() is False


def test_deactivated_session_is_invalid_even_if_not_expired():
    session = Session.create(user_id=1, expiration_days=30)

    session.deactivate()

    assert session.is_active is False
    assert session.expires_at > utcnow()
    assert session.is_valid() is False


def test_deactivate_is_idempotent():
    session = Session.create(user_id=1)

    session.deactivate()
    session.deactivate()

    assert session.is_active is False


def test_expired_active_session_is_invalid():
    session = Session.create(user_id=1)
    session.expires_at = utcnow() - timedelta(minutes=1)

    assert session.is_active is True
    assert session.is_valid() is False


def test_extend_adds_to_current_expiry():
    session = Session.create(user_id=1, expiration_days=7)

    session.extend(14)

    assert session.expires_at - session.created_at == timedelta(days=21)


def test_extensions_compound():
    session = Session.create(user_id=1, expiration_days=1)

    session.extend(2)
    session.extend(3)

    assert session.expires_at - session.created_at == timedelta(days=6)


def test_extend_zero_is_noop():
    session = Session.create(user_id=1)
    expires_at = session.expires_at

    session.extend(0)

    assert session.expires_at == expires_at


def test_extend_negative_shortens_window():
    session = Session.create(user_id=1, expiration_days=10)

    session.extend(-4)

    assert session.expires_at - session.created_at == timedelta(days=6)


def test_extend_does_not_reactivate():
    session = Session.create(user_id=1)
    session.deactivate()

    session.extend(5)

    assert session.is_valid() is False


def test_update_data_replaces_data():
    session = Session.create(user_id=1)

    session.update_data('{"campaign_id": 3}')

    assert session.data == '{"campaign_id": 3}'


def test_update_data_accepts_empty_string():
    session = Session.create(user_id=1)

    session.update_data("")

    assert session.data == ""


def test_update_data_rejects_none():
    session = Session.create(user_id=1)

    with pytest.raises(InvalidArgumentError) as exc_info:
        session.update_data(None)

    assert exc_info.value.argument == "data"
    assert isinstance(exc_info.value, ValueError)
    assert session.data == "{}"
