from datetime import timedelta

import pytest

from taskify.core.database import utcnow
from taskify.models import Session
from taskify.services.session_provider import SessionProvider, token_from_cookie


def test_token_from_signed_cookie():
    assert token_from_cookie("tok123.c2lnbmF0dXJl") == "tok123"
    assert token_from_cookie("unsigned") == "unsigned"
    assert token_from_cookie("") is None
    assert token_from_cookie(None) is None
    assert token_from_cookie(".sig") is None


@pytest.mark.asyncio
async def test_valid_session_resolves_user(db_session, test_user):
    db_session.add(Session(token="live", user_id=test_user.id, expires_at=utcnow() + timedelta(hours=1)))
    await db_session.commit()

    user = await SessionProvider().get_session_user(db_session, "live.sig")

    assert user.id == test_user.id


@pytest.mark.asyncio
async def test_expired_session_rejected(db_session, test_user):
    db_session.add(Session(token="old", user_id=test_user.id, expires_at=utcnow() - timedelta(seconds=1)))
    await db_session.commit()

    assert await SessionProvider().get_session_user(db_session, "old.sig") is None


@pytest.mark.asyncio
async def test_unknown_token(db_session, test_user):
    assert await SessionProvider().get_session_user(db_session, "nobody.sig") is None
