"""
Owner-scoped project operations.

Every read and write here is restricted to projects owned by the calling
user. Multi-row mutations run inside ``unit_of_work`` so a reader never sees
half of a cascade.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, Field
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from taskify.core.database import store_errors, unit_of_work, utcnow
from taskify.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from taskify.models.project import Project
from taskify.models.task import Task
from taskify.models.task_status import TaskStatus

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


class ProjectPatch(BaseModel):
    """Partial project update. Fields left unset are not touched."""
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None


@dataclass
class ProjectWithTaskCount:
    project: Project
    task_count: int


@dataclass
class ProjectWithTasks:
    project: Project
    tasks: List[Task] = field(default_factory=list)


def require_title(title: Optional[str], entity: str) -> None:
    if title is None or not title.strip():
        raise ValidationError(f"{entity} title cannot be empty")


def escape_like(query: str) -> str:
    """Make LIKE wildcards in user input match literally."""
    return (
        query.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def ordered_tasks_query(project_id: str):
    """Tasks of one project joined with status, in display order."""
    return (
        select(Task)
        .join(Task.status)
        .options(contains_eager(Task.status))
        .where(Task.project_id == project_id)
        .order_by(TaskStatus.sort_order.asc(), Task.created_at.desc(), Task.id.asc())
        .execution_options(populate_existing=True)
    )


async def load_owned_project(db: AsyncSession, project_id: str, user_id: str) -> Project:
    """Fetch a project and check it belongs to user_id."""
    with store_errors():
        project = await db.get(Project, project_id)
    if project is None:
        raise NotFoundError("Project", project_id)
    if project.user_id != user_id:
        raise AuthorizationError("Project", project_id, user_id)
    return project


class ProjectService:
    """Project lifecycle and listing for one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_projects(self, user_id: str) -> List[ProjectWithTaskCount]:
        """All of the user's projects with task counts, most recently touched first."""
        return await self._projects_with_counts(user_id)

    async def search_projects(self, user_id: str, query: str) -> List[ProjectWithTaskCount]:
        """
        Case-insensitive substring match on title, scoped to user_id.

        A blank query returns the same set as list_projects. Otherwise the
        query is matched as given, surrounding spaces included.
        """
        if not query or not query.strip():
            return await self._projects_with_counts(user_id)

        pattern = f"%{escape_like(query)}%"
        return await self._projects_with_counts(
            user_id, Project.title.ilike(pattern, escape=LIKE_ESCAPE)
        )

    async def get_project(self, project_id: str, user_id: str) -> ProjectWithTasks:
        """Project plus its tasks, ordered by status sort_order then newest first."""
        project = await load_owned_project(self.db, project_id, user_id)
        with store_errors():
            result = await self.db.execute(ordered_tasks_query(project.id))
        return ProjectWithTasks(project=project, tasks=list(result.scalars().all()))

    async def create_project(
        self,
        user_id: str,
        title: str,
        description: Optional[str] = None,
    ) -> Project:
        require_title(title, "Project")

        now = utcnow()
        project = Project(
            user_id=user_id,
            title=title,
            description=description,
            created_at=now,
            updated_at=now,
        )
        async with unit_of_work(self.db):
            self.db.add(project)

        logger.info(f"Created project {project.id} for user {user_id}")
        return project

    async def update_project(self, project_id: str, user_id: str, patch: ProjectPatch) -> Project:
        """
        Apply only the fields present in patch and refresh updated_at.

        ``description=None`` in the patch clears the description; an absent
        description is left as is.
        """
        changes = patch.model_dump(exclude_unset=True)
        if "title" in changes:
            require_title(changes["title"], "Project")

        async with unit_of_work(self.db):
            project = await load_owned_project(self.db, project_id, user_id)
            for name, value in changes.items():
                setattr(project, name, value)
            project.touch(utcnow())

        logger.info(f"Updated project {project_id}: {list(changes.keys())}")
        return project

    async def delete_project(self, project_id: str, user_id: str) -> None:
        """Delete the project and all of its tasks in one transaction."""
        async with unit_of_work(self.db):
            project = await load_owned_project(self.db, project_id, user_id)
            result = await self.db.execute(delete(Task).where(Task.project_id == project.id))
            await self.db.execute(delete(Project).where(Project.id == project.id))

        logger.info(f"Deleted project {project_id} and {result.rowcount} task(s)")

    async def _projects_with_counts(self, user_id: str, *criteria) -> List[ProjectWithTaskCount]:
        task_counts = (
            select(Task.project_id, func.count(Task.id).label("task_count"))
            .group_by(Task.project_id)
            .subquery()
        )
        stmt = (
            select(Project, func.coalesce(task_counts.c.task_count, 0))
            .outerjoin(task_counts, task_counts.c.project_id == Project.id)
            .where(Project.user_id == user_id, *criteria)
            .order_by(Project.updated_at.desc(), Project.id.asc())
        )
        with store_errors():
            result = await self.db.execute(stmt)
            rows = result.all()
        return [
            ProjectWithTaskCount(project=project, task_count=int(count))
            for project, count in rows
        ]
