from __future__ import annotations

from typing import (
    Dict,
    List,
    Optional,
    TYPE_CHECKING
)
from datetime import datetime
from enum import Enum
import logging

from pydantic import BaseModel, ConfigDict, Field

from ..config import settings
from ..core.exceptions import (
    InvalidStatusTransitionError,
    NotFoundError,
    ValidationError,
)
from ..repositories.sprint_repository import SprintRepository
from .sprint_analytics import (
    SprintAnalytics,
    build_sprint_analytics,
    refresh_estimation_cache,
)
from .project_service import ProjectNotFoundError
from .task_service import TaskRead

if TYPE_CHECKING:
    from ..models.sprint import Sprint

# Type aliases
SprintId = int
ProjectId = int

# Enums
class SprintStatus(str, Enum):
    PLANNED = "planned"
    ACTIVE = "active"
    COMPLETED = "completed"

# Pydantic models
class SprintRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: SprintId
    project_id: ProjectId
    name: str
    goal: Optional[str] = None
    estimation_type: str
    total_estimation: float = 0.0
    remaining_estimation: float = 0.0
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: str
    tasks: List[TaskRead] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# Custom exceptions
class SprintNotFoundError(NotFoundError):
    def __init__(self, sprint_id: SprintId) -> None:
        super().__init__("Sprint not found")
        self.sprint_id = sprint_id

# Main service class
class SprintService:
    """
    Sprint creation, reads, lifecycle and analytics.

    Every sprint handed back to a caller has its cached
    ``total_estimation`` / ``remaining_estimation`` recomputed from its
    tasks first; whatever was stored is never trusted.
    """

    VALID_TRANSITIONS: Dict[SprintStatus, List[SprintStatus]] = {
        SprintStatus.PLANNED: [SprintStatus.ACTIVE],
        SprintStatus.ACTIVE: [SprintStatus.COMPLETED],
        SprintStatus.COMPLETED: [],
    }

    def __init__(
        self,
        repository: SprintRepository,
        enforce_transitions: Optional[bool] = None
    ) -> None:
        self.repository = repository
        if enforce_transitions is None:
            enforce_transitions = settings.enforce_sprint_transitions
        self.enforce_transitions = enforce_transitions
        self._logger = logging.getLogger(__name__)

    async def create_sprint(
        self,
        project_id: ProjectId,
        name: str,
        estimation_type: str,
        status: str,
        goal: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        total_estimation: float = 0.0,
        remaining_estimation: float = 0.0
    ) -> Sprint:
        """Create a new, empty sprint inside a project."""

        from ..models.sprint import Sprint

        if not name or not project_id or not estimation_type or not status:
            raise ValidationError("Missing required fields")

        if not await self.repository.project_exists(project_id):
            raise ProjectNotFoundError(project_id)

        self._logger.info("Creating sprint '%s' for project %d", name, project_id)

        sprint = Sprint(
            project_id=project_id,
            name=name,
            goal=goal,
            estimation_type=estimation_type,
            start_date=start_date,
            end_date=end_date,
            status=status,
            total_estimation=total_estimation,
            remaining_estimation=remaining_estimation
        )

        sprint = await self.repository.add(sprint)

        self._logger.info("Created sprint %d", sprint.id)
        return refresh_estimation_cache(sprint)

    async def get_sprint(self, sprint_id: SprintId) -> Sprint:
        """Get sprint by ID."""

        sprint = await self.repository.get_with_tasks(sprint_id)

        if sprint is None:
            raise SprintNotFoundError(sprint_id)

        return refresh_estimation_cache(sprint)

    async def list_sprints(self, project_id: Optional[ProjectId] = None) -> List[Sprint]:
        """List sprints, optionally for a single project."""

        sprints = await self.repository.list_with_tasks(project_id)
        return [refresh_estimation_cache(sprint) for sprint in sprints]

    async def get_sprint_analytics(self, sprint_id: SprintId) -> SprintAnalytics:
        """Estimation summary, status breakdown and burndown for one sprint."""

        sprint = await self.get_sprint(sprint_id)
        analytics = build_sprint_analytics(sprint)

        self._logger.debug(
            "Analytics for sprint %d: %.2f/%.2f remaining",
            sprint_id,
            analytics.estimation_summary.remaining_estimation,
            analytics.estimation_summary.total_estimation
        )
        return analytics

    async def update_sprint_status(self, sprint_id: SprintId, status: str) -> Sprint:
        """Overwrite the sprint status.

        Any string is accepted unless transition enforcement is switched on,
        in which case only moves listed in ``VALID_TRANSITIONS`` pass.
        """

        if not status:
            raise ValidationError("Missing required fields")

        sprint = await self.get_sprint(sprint_id)

        if self.enforce_transitions and not self._is_valid_status_transition(sprint.status, status):
            raise InvalidStatusTransitionError(sprint.status, status)

        previous = sprint.status
        sprint.status = status
        sprint = await self.repository.save(sprint)

        self._logger.info("Updated sprint %d status %s -> %s", sprint_id, previous, status)
        return refresh_estimation_cache(sprint)

    # Private methods

    def _is_valid_status_transition(self, current: Optional[str], new: str) -> bool:
        """Check valid status transitions.

        A sprint whose current status is outside the conventional set may
        move to any conventional status.
        """

        if not is_valid_sprint_status(new):
            return False
        if not is_valid_sprint_status(current):
            return True

        return SprintStatus(new) in self.VALID_TRANSITIONS[SprintStatus(current)]


def is_valid_sprint_status(status: Optional[str]) -> bool:
    """Check whether a string is one of the conventional sprint statuses."""
    try:
        SprintStatus(status)
        return True
    except ValueError:
        return False


__all__ = [
    "SprintService",
    "SprintStatus",
    "SprintRead",
    "SprintNotFoundError",
    "is_valid_sprint_status",
]
