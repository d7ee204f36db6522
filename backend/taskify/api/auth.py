"""
Session lookup endpoint.

Sign-in, sign-up and credential checks are handled by the external auth
provider; /api/auth is a public prefix so its callbacks bypass the gate.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.core.config import settings
from taskify.core.database import get_db
from taskify.services import session_provider

router = APIRouter(prefix="/api/auth", tags=["authentication"])


class SessionUserResponse(BaseModel):
    id: str
    email: str
    name: Optional[str]

    class Config:
        from_attributes = True


@router.get("/session", response_model=Optional[SessionUserResponse])
async def get_session(request: Request, db: AsyncSession = Depends(get_db)):
    """
    Return the user behind the session cookie, or null.

    Never fails for a missing or expired session.
    """
    cookie_value = request.cookies.get(settings.session_cookie_name)
    return await session_provider.get_session_user(db, cookie_value)
