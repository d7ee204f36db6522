# Services module
from .status_catalog import StatusCatalog
from .project_service import ProjectService, ProjectPatch, ProjectWithTaskCount, ProjectWithTasks
from .task_service import TaskService, TaskPatch
from .session_provider import SessionProvider, session_provider

__all__ = [
    "StatusCatalog",
    "ProjectService",
    "ProjectPatch",
    "ProjectWithTaskCount",
    "ProjectWithTasks",
    "TaskService",
    "TaskPatch",
    "SessionProvider",
    "session_provider",
]
