"""
Shared FastAPI dependencies: current user and per-request services.
"""
from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.core.config import settings
from taskify.core.database import get_db
from taskify.services import ProjectService, StatusCatalog, TaskService, session_provider


async def get_current_user_id(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> str:
    """
    Resolve the session cookie to a user id.

    The Access Gate has already rejected requests without a cookie; this is
    where the cookie is actually validated.
    """
    cookie_value = request.cookies.get(settings.session_cookie_name)
    user = await session_provider.get_session_user(db, cookie_value)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user.id


def get_status_catalog(db: AsyncSession = Depends(get_db)) -> StatusCatalog:
    return StatusCatalog(db)


def get_project_service(db: AsyncSession = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


def get_task_service(
    db: AsyncSession = Depends(get_db),
    catalog: StatusCatalog = Depends(get_status_catalog),
) -> TaskService:
    return TaskService(db, catalog)
