"""
Owner-scoped task operations.

Every task mutation is followed, in the same transaction, by a refresh of the
parent project's updated_at. A reader therefore never observes a changed task
next to a stale project timestamp.
"""
import logging
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taskify.core.database import store_errors, unit_of_work, utcnow
from taskify.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from taskify.models.project import Project
from taskify.models.task import Task
from taskify.services.project_service import load_owned_project, ordered_tasks_query, require_title
from taskify.services.status_catalog import StatusCatalog

logger = logging.getLogger(__name__)


class TaskPatch(BaseModel):
    """Partial task update. Fields left unset are not touched."""
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    status_id: Optional[str] = None


class TaskService:
    """Task lifecycle with parent-project touch, for one database session."""

    def __init__(self, db: AsyncSession, catalog: Optional[StatusCatalog] = None):
        self.db = db
        self.catalog = catalog or StatusCatalog(db)

    async def get_task(self, task_id: str, user_id: str) -> Task:
        await self._load_owned_task(task_id, user_id)
        return await self._reload(task_id)

    async def list_tasks(
        self,
        project_id: str,
        user_id: str,
        status_id: Optional[str] = None,
    ) -> List[Task]:
        """Tasks of one project in display order, optionally limited to one status."""
        project = await load_owned_project(self.db, project_id, user_id)
        stmt = ordered_tasks_query(project.id)
        if status_id is not None:
            await self.catalog.get_status(status_id)
            stmt = stmt.where(Task.status_id == status_id)
        with store_errors():
            result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create_task(
        self,
        project_id: str,
        user_id: str,
        title: str,
        description: Optional[str] = None,
        status_id: Optional[str] = None,
    ) -> Task:
        """
        Create a task under project_id and touch the project.

        Without status_id the catalog default ("Incomplete") is used.

        Raises:
            ValidationError: blank title, nothing is written
            NotFoundError: project or status does not exist
            AuthorizationError: project belongs to another user
        """
        require_title(title, "Task")

        async with unit_of_work(self.db):
            project = await load_owned_project(self.db, project_id, user_id)
            if status_id is None:
                status = await self.catalog.default_status()
            else:
                status = await self.catalog.get_status(status_id)

            now = utcnow()
            task = Task(
                project_id=project.id,
                status_id=status.id,
                title=title,
                description=description,
                created_at=now,
                updated_at=now,
            )
            self.db.add(task)
            project.touch(now)

        logger.info(f"Created task {task.id} in project {project_id} with status '{status.name}'")
        return await self._reload(task.id)

    async def update_task(self, task_id: str, user_id: str, patch: TaskPatch) -> Task:
        """Apply only the fields present in patch, refresh updated_at, touch the project."""
        changes = patch.model_dump(exclude_unset=True)
        if "title" in changes:
            require_title(changes["title"], "Task")
        if "status_id" in changes and changes["status_id"] is None:
            raise ValidationError("Task status cannot be empty")

        async with unit_of_work(self.db):
            task, project = await self._load_owned_task(task_id, user_id)
            if "status_id" in changes:
                await self.catalog.get_status(changes["status_id"])

            for name, value in changes.items():
                setattr(task, name, value)

            now = utcnow()
            task.updated_at = now
            project.touch(now)

        logger.info(f"Updated task {task_id}: {list(changes.keys())}")
        return await self._reload(task_id)

    async def delete_task(self, task_id: str, user_id: str) -> None:
        """Delete a task and touch the project it belonged to."""
        async with unit_of_work(self.db):
            # Resolve the parent first, it is still needed after the row is gone
            task, project = await self._load_owned_task(task_id, user_id)
            await self.db.execute(delete(Task).where(Task.id == task.id))
            project.touch(utcnow())

        logger.info(f"Deleted task {task_id} from project {project.id}")

    async def _load_owned_task(self, task_id: str, user_id: str) -> Tuple[Task, Project]:
        with store_errors():
            result = await self.db.execute(
                select(Task, Project)
                .join(Project, Task.project_id == Project.id)
                .where(Task.id == task_id)
            )
            row = result.one_or_none()
        if row is None:
            raise NotFoundError("Task", task_id)

        task, project = row
        if project.user_id != user_id:
            raise AuthorizationError("Task", task_id, user_id)
        return task, project

    async def _reload(self, task_id: str) -> Task:
        with store_errors():
            result = await self.db.execute(
                select(Task)
                .options(selectinload(Task.status))
                .where(Task.id == task_id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one()
