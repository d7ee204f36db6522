"""
Read-only access to the workflow status catalog.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.core.config import settings
from taskify.core.database import store_errors
from taskify.core.exceptions import NotFoundError
from taskify.models.task_status import TaskStatus

logger = logging.getLogger(__name__)


class StatusCatalog:
    """Ordered list of workflow statuses, used for defaults and display order."""

    def __init__(self, db: AsyncSession, initial_status_name: Optional[str] = None):
        self.db = db
        self.initial_status_name = initial_status_name or settings.initial_status_name

    async def list_statuses(self) -> List[TaskStatus]:
        """All statuses ascending by sort_order, independent of insertion order."""
        with store_errors():
            result = await self.db.execute(
                select(TaskStatus).order_by(TaskStatus.sort_order.asc(), TaskStatus.id.asc())
            )
        return list(result.scalars().all())

    async def get_status(self, status_id: str) -> TaskStatus:
        with store_errors():
            status = await self.db.get(TaskStatus, status_id)
        if status is None:
            raise NotFoundError("Status", status_id)
        return status

    async def default_status(self) -> TaskStatus:
        """
        Status assigned to new tasks when none is given.

        Prefers the status named ``initial_status_name``; falls back to the
        first status by sort_order when no such name is seeded.
        """
        statuses = await self.list_statuses()
        if not statuses:
            raise NotFoundError("Status", self.initial_status_name)

        for status in statuses:
            if status.name == self.initial_status_name:
                return status

        logger.warning(
            f"Initial status '{self.initial_status_name}' not in catalog, "
            f"falling back to '{statuses[0].name}'"
        )
        return statuses[0]
