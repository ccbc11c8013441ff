"""
Persistence for sprints.

Services receive a ``SprintRepository`` instead of reaching for a
process-wide database handle, so the analytics code can be exercised with
any implementation.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models.project import Project
from ..models.sprint import Sprint


class SprintRepository(ABC):
    """Loads and stores sprints together with their tasks."""

    @abstractmethod
    async def get_with_tasks(self, sprint_id: int) -> Optional[Sprint]:
        """Return the sprint with ``tasks`` populated, or None."""

    @abstractmethod
    async def list_with_tasks(self, project_id: Optional[int] = None) -> List[Sprint]:
        """Return all sprints, optionally only those of one project."""

    @abstractmethod
    async def add(self, sprint: Sprint) -> Sprint:
        """Persist a new sprint and return it with an id assigned."""

    @abstractmethod
    async def save(self, sprint: Sprint) -> Sprint:
        """Persist changes to an existing sprint."""

    @abstractmethod
    async def project_exists(self, project_id: int) -> bool:
        """Whether the owning project exists."""


class SQLAlchemySprintRepository(SprintRepository):
    """Sprint repository backed by an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_with_tasks(self, sprint_id: int) -> Optional[Sprint]:
        stmt = (
            select(Sprint)
            .options(selectinload(Sprint.tasks))
            .where(Sprint.id == sprint_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_with_tasks(self, project_id: Optional[int] = None) -> List[Sprint]:
        stmt = select(Sprint).options(selectinload(Sprint.tasks))
        if project_id is not None:
            stmt = stmt.where(Sprint.project_id == project_id)
        stmt = stmt.order_by(Sprint.id).execution_options(populate_existing=True)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def add(self, sprint: Sprint) -> Sprint:
        self.db.add(sprint)
        await self.db.commit()
        return await self.get_with_tasks(sprint.id)

    async def save(self, sprint: Sprint) -> Sprint:
        await self.db.commit()
        return await self.get_with_tasks(sprint.id)

    async def project_exists(self, project_id: int) -> bool:
        return await self.db.get(Project, project_id) is not None
