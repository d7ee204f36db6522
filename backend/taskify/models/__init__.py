# Database models
from taskify.models.user import User
from taskify.models.session import Session
from taskify.models.project import Project
from taskify.models.task_status import TaskStatus
from taskify.models.task import Task

__all__ = ["User", "Session", "Project", "TaskStatus", "Task"]
