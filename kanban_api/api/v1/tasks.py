from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from pydantic import BaseModel

from ...database import get_db
from ...services.task_service import TaskRead, TaskService
from .common import DataResponse, MessageResponse

router = APIRouter()

class TaskCreateRequest(BaseModel):
    title: str
    status: str
    sprint_id: int
    estimation: float = 0.0
    description: Optional[str] = None
    assign_to: Optional[int] = None

class TaskStatusRequest(BaseModel):
    status: str

class TaskAssignRequest(BaseModel):
    assign_to: Optional[int] = None


@router.post("", response_model=DataResponse[TaskRead])
async def create_task(
    request: TaskCreateRequest,
    db: AsyncSession = Depends(get_db)
):
    """Create a task in a sprint"""

    task = await TaskService(db).create_task(
        title=request.title,
        status=request.status,
        sprint_id=request.sprint_id,
        estimation=request.estimation,
        description=request.description,
        assign_to=request.assign_to
    )

    return {"data": TaskRead.model_validate(task)}


@router.get("", response_model=DataResponse[List[TaskRead]])
async def get_all_tasks(
    sprint_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db)
):
    """List tasks, optionally for a single sprint"""

    tasks = await TaskService(db).list_tasks(sprint_id=sprint_id)

    return {"data": [TaskRead.model_validate(task) for task in tasks]}


@router.get("/{task_id}", response_model=DataResponse[TaskRead])
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get task details"""

    task = await TaskService(db).get_task(task_id)

    return {"data": TaskRead.model_validate(task)}


@router.put("/{task_id}", response_model=DataResponse[TaskRead])
async def update_task_status(
    task_id: int,
    request: TaskStatusRequest,
    db: AsyncSession = Depends(get_db)
):
    """Move a task to another status"""

    task = await TaskService(db).update_status(task_id, request.status)

    return {"data": TaskRead.model_validate(task)}


@router.put("/{task_id}/assign", response_model=DataResponse[TaskRead])
async def assign_task(
    task_id: int,
    request: TaskAssignRequest,
    db: AsyncSession = Depends(get_db)
):
    """Assign a task to a user; 0 or null unassigns"""

    task = await TaskService(db).assign(task_id, request.assign_to)

    return {"data": TaskRead.model_validate(task)}


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Delete a task"""

    await TaskService(db).delete_task(task_id)

    return {"message": "Task deleted successfully"}
