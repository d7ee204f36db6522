"""
Task endpoints addressed by task id.

Creation and per-project listing live under /api/projects/{id}/tasks.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from taskify.api.deps import get_current_user_id, get_task_service
from taskify.api.statuses import StatusResponse
from taskify.services import TaskPatch, TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


class TaskCreate(BaseModel):
    """Request schema for creating a task."""
    title: str = Field(..., max_length=500)
    description: Optional[str] = None
    status_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Design mockups",
                "description": "Create initial design concepts",
            }
        }


class TaskResponse(BaseModel):
    """Response schema for task data, status included."""
    id: str
    project_id: str
    title: str
    description: Optional[str]
    status_id: str
    status: StatusResponse
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Get a single task. 404 if it does not exist or is not yours."""
    return await service.get_task(task_id, user_id)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    patch: TaskPatch,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """
    Update a task. Only fields provided in the request are changed.

    The parent project's updated_at is refreshed in the same transaction.
    """
    return await service.update_task(task_id, user_id, patch)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task and refresh its project's updated_at."""
    await service.delete_task(task_id, user_id)
    return None
