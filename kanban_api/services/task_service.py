from __future__ import annotations

from typing import List, Optional
from datetime import datetime
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from pydantic import BaseModel, ConfigDict

from ..core.exceptions import NotFoundError
from ..models.sprint import Sprint
from ..models.task import Task
from ..models.user import User
from .project_service import UserNotFoundError

# Type aliases
TaskId = int
SprintId = int
UserId = int


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[TaskId] = None
    title: str
    description: Optional[str] = None
    status: str
    estimation: float = 0.0
    sprint_id: Optional[SprintId] = None
    assign_to: Optional[UserId] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Custom exceptions
class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: TaskId) -> None:
        super().__init__("Task not found")
        self.task_id = task_id


class TaskService:
    """CRUD operations on tasks."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self._logger = logging.getLogger(__name__)

    async def create_task(
        self,
        title: str,
        status: str,
        sprint_id: SprintId,
        estimation: float = 0.0,
        description: Optional[str] = None,
        assign_to: Optional[UserId] = None
    ) -> Task:
        """Create a task inside an existing sprint."""

        # Imported here to avoid a cycle with the sprint service module
        from .sprint_service import SprintNotFoundError

        if await self.db.get(Sprint, sprint_id) is None:
            raise SprintNotFoundError(sprint_id)

        if assign_to:
            await self._ensure_user_exists(assign_to)

        task = Task(
            title=title,
            description=description,
            status=status,
            sprint_id=sprint_id,
            estimation=estimation,
            assign_to=assign_to or None
        )

        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)

        self._logger.info("Created task %d in sprint %d", task.id, sprint_id)
        return task

    async def list_tasks(self, sprint_id: Optional[SprintId] = None) -> List[Task]:
        """List all tasks, optionally restricted to one sprint."""

        stmt = select(Task)
        if sprint_id is not None:
            stmt = stmt.where(Task.sprint_id == sprint_id)
        stmt = stmt.order_by(Task.id)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_task(self, task_id: TaskId) -> Task:
        task = await self.db.get(Task, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def update_status(self, task_id: TaskId, status: str) -> Task:
        """Overwrite a task's status."""

        task = await self.get_task(task_id)
        previous = task.status
        task.status = status

        await self.db.commit()
        await self.db.refresh(task)

        self._logger.info("Task %d status %s -> %s", task_id, previous, status)
        return task

    async def assign(self, task_id: TaskId, user_id: Optional[UserId]) -> Task:
        """Assign a task to a user; a falsy user id unassigns it."""

        task = await self.get_task(task_id)

        if user_id:
            await self._ensure_user_exists(user_id)
            task.assign_to = user_id
        else:
            task.assign_to = None

        await self.db.commit()
        await self.db.refresh(task)

        self._logger.info("Task %d assigned to %s", task_id, task.assign_to)
        return task

    async def delete_task(self, task_id: TaskId) -> None:
        task = await self.get_task(task_id)
        await self.db.delete(task)
        await self.db.commit()
        self._logger.info("Deleted task %d", task_id)

    async def _ensure_user_exists(self, user_id: UserId) -> None:
        if await self.db.get(User, user_id) is None:
            raise UserNotFoundError(user_id)
