from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from pydantic import BaseModel

from ...database import get_db
from ...services.project_service import ProjectRead, ProjectService
from ...services.sprint_service import SprintRead, SprintService
from .common import DataResponse, MessageResponse
from .sprints import get_sprint_service

router = APIRouter()

class ProjectCreateRequest(BaseModel):
    name: str
    description: str
    participant_ids: Optional[List[int]] = None

class ParticipantRequest(BaseModel):
    user_id: int


@router.post("", response_model=DataResponse[ProjectRead], status_code=201)
async def create_project(
    request: ProjectCreateRequest,
    db: AsyncSession = Depends(get_db)
):
    """Create a project, optionally with initial participants"""

    project = await ProjectService(db).create_project(
        name=request.name,
        description=request.description,
        participant_ids=request.participant_ids
    )

    return {"data": ProjectRead.model_validate(project)}


@router.get("", response_model=DataResponse[List[ProjectRead]])
async def get_all_projects(db: AsyncSession = Depends(get_db)):
    """List projects with their participants"""

    projects = await ProjectService(db).list_projects()

    return {"data": [ProjectRead.model_validate(project) for project in projects]}


@router.get("/{project_id}", response_model=DataResponse[ProjectRead])
async def get_project(
    project_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get project details"""

    project = await ProjectService(db).get_project(project_id)

    return {"data": ProjectRead.model_validate(project)}


@router.post("/{project_id}/participants", response_model=DataResponse[ProjectRead])
async def add_participant(
    project_id: int,
    request: ParticipantRequest,
    db: AsyncSession = Depends(get_db)
):
    """Add a user to a project"""

    project = await ProjectService(db).add_participant(project_id, request.user_id)

    return {"data": ProjectRead.model_validate(project)}


@router.delete("/{project_id}/participants/{user_id}", response_model=MessageResponse)
async def remove_participant(
    project_id: int,
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Remove a user from a project"""

    await ProjectService(db).remove_participant(project_id, user_id)

    return {"message": "Participant removed successfully"}


@router.get("/{project_id}/sprints", response_model=DataResponse[List[SprintRead]])
async def get_project_sprints(
    project_id: int,
    sprint_service: SprintService = Depends(get_sprint_service)
):
    """List the sprints of a project with freshly computed estimations"""

    sprints = await sprint_service.list_sprints(project_id=project_id)

    return {"data": [SprintRead.model_validate(sprint) for sprint in sprints]}
