from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel

from ...database import get_db
from ...repositories.sprint_repository import SQLAlchemySprintRepository
from ...services.sprint_analytics import SprintAnalytics
from ...services.sprint_service import SprintId, SprintNotFoundError, SprintRead, SprintService
from .common import DataResponse

router = APIRouter()

class SprintCreateRequest(BaseModel):
    project_id: int
    name: str
    estimation_type: str
    status: str
    goal: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    total_estimation: float = 0.0
    remaining_estimation: float = 0.0

class SprintStatusRequest(BaseModel):
    status: str


def get_sprint_service(db: AsyncSession = Depends(get_db)) -> SprintService:
    return SprintService(SQLAlchemySprintRepository(db))


def sprint_id_path(sprint_id: str) -> SprintId:
    """A sprint id that is not a number names no sprint."""
    try:
        return int(sprint_id)
    except ValueError:
        raise SprintNotFoundError(sprint_id) from None


@router.post("", response_model=DataResponse[SprintRead])
async def create_sprint(
    request: SprintCreateRequest,
    sprint_service: SprintService = Depends(get_sprint_service)
):
    """Create a new sprint in a project"""

    sprint = await sprint_service.create_sprint(
        project_id=request.project_id,
        name=request.name,
        goal=request.goal,
        estimation_type=request.estimation_type,
        start_date=request.start_date,
        end_date=request.end_date,
        status=request.status,
        total_estimation=request.total_estimation,
        remaining_estimation=request.remaining_estimation
    )

    return {"data": SprintRead.model_validate(sprint)}


@router.get("", response_model=DataResponse[List[SprintRead]])
async def get_all_sprints(
    project_id: Optional[int] = None,
    sprint_service: SprintService = Depends(get_sprint_service)
):
    """List sprints with freshly computed estimations"""

    sprints = await sprint_service.list_sprints(project_id=project_id)

    return {"data": [SprintRead.model_validate(sprint) for sprint in sprints]}


@router.get("/{sprint_id}", response_model=DataResponse[SprintRead])
async def get_sprint(
    sprint_id: SprintId = Depends(sprint_id_path),
    sprint_service: SprintService = Depends(get_sprint_service)
):
    """Get sprint details"""

    sprint = await sprint_service.get_sprint(sprint_id)

    return {"data": SprintRead.model_validate(sprint)}


@router.get("/{sprint_id}/analytics", response_model=DataResponse[SprintAnalytics])
async def get_sprint_analytics(
    sprint_id: SprintId = Depends(sprint_id_path),
    sprint_service: SprintService = Depends(get_sprint_service)
):
    """Estimation summary, task breakdown and burndown chart data"""

    analytics = await sprint_service.get_sprint_analytics(sprint_id)

    return {"data": analytics}


@router.put("/{sprint_id}/status", response_model=DataResponse[SprintRead])
async def update_sprint_status(
    request: SprintStatusRequest,
    sprint_id: SprintId = Depends(sprint_id_path),
    sprint_service: SprintService = Depends(get_sprint_service)
):
    """Set the sprint status"""

    sprint = await sprint_service.update_sprint_status(sprint_id, request.status)

    return {"data": SprintRead.model_validate(sprint)}
