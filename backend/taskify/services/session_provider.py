"""
Session provider: resolves a session cookie to a user.

Credential checks and session issuing belong to the external auth provider.
This side only reads the sessions table it writes.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.core.database import store_errors, utcnow
from taskify.models.session import Session
from taskify.models.user import User

logger = logging.getLogger(__name__)


def token_from_cookie(cookie_value: Optional[str]) -> Optional[str]:
    """Signed cookies look like ``<token>.<signature>``; return the token part."""
    if not cookie_value:
        return None
    token = cookie_value.split(".", 1)[0].strip()
    return token or None


class SessionProvider:
    """Looks up unexpired sessions by token."""

    async def get_session_user(self, db: AsyncSession, cookie_value: Optional[str]) -> Optional[User]:
        token = token_from_cookie(cookie_value)
        if token is None:
            return None

        with store_errors():
            result = await db.execute(
                select(Session, User)
                .join(User, Session.user_id == User.id)
                .where(Session.token == token)
            )
            row = result.one_or_none()
        if row is None:
            logger.debug("Session token not recognised")
            return None

        session, user = row
        if session.is_expired(utcnow()):
            logger.debug(f"Session {session.id} for user {user.id} has expired")
            return None
        return user


session_provider = SessionProvider()
