from __future__ import annotations

from typing import List, Optional
from datetime import datetime
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from pydantic import BaseModel, ConfigDict, Field

from ..core.exceptions import NotFoundError, ValidationError
from ..models.project import Project
from ..models.user import User

# Type aliases
ProjectId = int
UserId = int


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UserId
    username: str
    email: Optional[str] = None


class ProjectRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: ProjectId
    name: str
    description: Optional[str] = None
    participants: List[UserRead] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Custom exceptions
class ProjectNotFoundError(NotFoundError):
    def __init__(self, project_id: ProjectId) -> None:
        super().__init__("Project not found")
        self.project_id = project_id


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: UserId) -> None:
        super().__init__("User not found")
        self.user_id = user_id


class ProjectService:
    """Projects and their participants."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self._logger = logging.getLogger(__name__)

    async def create_project(
        self,
        name: str,
        description: str,
        participant_ids: Optional[List[UserId]] = None
    ) -> Project:
        """Create a project; unknown participant ids are skipped."""

        if not name or not description:
            raise ValidationError("Missing required fields")

        project = Project(name=name, description=description)

        if participant_ids:
            stmt = select(User).where(User.id.in_(participant_ids))
            result = await self.db.execute(stmt)
            project.participants = list(result.scalars().all())
        else:
            project.participants = []

        self.db.add(project)
        await self.db.commit()

        self._logger.info(
            "Created project %d with %d participant(s)",
            project.id, len(project.participants)
        )
        return await self.get_project(project.id)

    async def list_projects(self) -> List[Project]:
        stmt = (
            select(Project)
            .options(selectinload(Project.participants))
            .order_by(Project.id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_project(self, project_id: ProjectId) -> Project:
        stmt = (
            select(Project)
            .options(selectinload(Project.participants))
            .where(Project.id == project_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        project = result.scalar_one_or_none()

        if project is None:
            raise ProjectNotFoundError(project_id)

        return project

    async def add_participant(self, project_id: ProjectId, user_id: UserId) -> Project:
        """Add a user to a project. Adding an existing participant is a no-op."""

        project = await self.get_project(project_id)

        user = await self.db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if user not in project.participants:
            project.participants.append(user)
            await self.db.commit()
            self._logger.info("Added user %d to project %d", user_id, project_id)

        return await self.get_project(project_id)

    async def remove_participant(self, project_id: ProjectId, user_id: UserId) -> None:
        """Remove a user from a project. Removing a non-participant is a no-op."""

        project = await self.get_project(project_id)

        for participant in list(project.participants):
            if participant.id == user_id:
                project.participants.remove(participant)

        await self.db.commit()
        self._logger.info("Removed user %d from project %d", user_id, project_id)
