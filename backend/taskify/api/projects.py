"""
Project CRUD API endpoints, plus task creation and listing per project.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from taskify.api.deps import get_current_user_id, get_project_service, get_task_service
from taskify.api.tasks import TaskCreate, TaskResponse
from taskify.services import ProjectPatch, ProjectService, ProjectWithTaskCount, TaskService

router = APIRouter(prefix="/api/projects", tags=["projects"])


class ProjectCreate(BaseModel):
    """Request schema for creating a project."""
    title: str = Field(..., max_length=500)
    description: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Website Redesign",
                "description": "Complete overhaul of company website with modern design",
            }
        }


class ProjectResponse(BaseModel):
    """Response schema for project data."""
    id: str
    user_id: str
    title: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectSummaryResponse(ProjectResponse):
    """Project with the number of tasks it owns."""
    task_count: int


class ProjectDetailResponse(ProjectResponse):
    """Project with its tasks in display order."""
    tasks: List[TaskResponse]


def _summary(item: ProjectWithTaskCount) -> ProjectSummaryResponse:
    data = ProjectResponse.model_validate(item.project).model_dump()
    return ProjectSummaryResponse(**data, task_count=item.task_count)


@router.get("", response_model=List[ProjectSummaryResponse])
async def list_projects(
    q: Optional[str] = Query(None, description="Case-insensitive title filter"),
    user_id: str = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
):
    """
    Get the current user's projects, most recently updated first.

    Query parameters:
    - q: only projects whose title contains this text (case-insensitive)
    """
    if q is None:
        projects = await service.list_projects(user_id)
    else:
        projects = await service.search_projects(user_id, q)
    return [_summary(p) for p in projects]


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    payload: ProjectCreate,
    user_id: str = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
):
    return await service.create_project(user_id, payload.title, payload.description)


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
):
    """Project with tasks ordered by status, newest first within a status."""
    view = await service.get_project(project_id, user_id)
    data = ProjectResponse.model_validate(view.project).model_dump()
    return ProjectDetailResponse(
        **data,
        tasks=[TaskResponse.model_validate(t) for t in view.tasks],
    )


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    patch: ProjectPatch,
    user_id: str = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
):
    """Only fields provided in the request are updated."""
    return await service.update_project(project_id, user_id, patch)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
):
    """Delete a project together with all of its tasks."""
    await service.delete_project(project_id, user_id)
    return None


@router.get("/{project_id}/tasks", response_model=List[TaskResponse])
async def list_project_tasks(
    project_id: str,
    status_id: Optional[str] = Query(None, description="Only tasks in this status"),
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    return await service.list_tasks(project_id, user_id, status_id)


@router.post("/{project_id}/tasks", response_model=TaskResponse, status_code=201)
async def create_project_task(
    project_id: str,
    payload: TaskCreate,
    user_id: str = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service),
):
    """Create a task; without status_id it starts as "Incomplete"."""
    return await service.create_task(
        project_id,
        user_id,
        payload.title,
        description=payload.description,
        status_id=payload.status_id,
    )
