"""
Status catalog endpoint.
"""
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from taskify.api.deps import get_current_user_id, get_status_catalog
from taskify.services import StatusCatalog

router = APIRouter(prefix="/api/statuses", tags=["statuses"])


class StatusResponse(BaseModel):
    """Response schema for a workflow status."""
    id: str
    name: str
    sort_order: int

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {"id": "a1b2c3", "name": "In Progress", "sort_order": 1}
        }


@router.get("", response_model=List[StatusResponse])
async def list_statuses(
    user_id: str = Depends(get_current_user_id),
    catalog: StatusCatalog = Depends(get_status_catalog),
):
    """All workflow statuses, ascending by sort_order."""
    return await catalog.list_statuses()
