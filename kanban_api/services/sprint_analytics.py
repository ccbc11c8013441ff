"""
Sprint estimation and progress analytics.

Pure aggregation over a sprint's tasks: totals, remaining and completed
work, percentage progress, a per-status breakdown and the burndown series
shown on the analytics view. Nothing in here touches the database; callers
load the sprint with its tasks and hand it over.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple
from datetime import datetime

from pydantic import BaseModel

from .task_service import TaskRead

DONE_STATUS = "done"
SEEDED_STATUSES = ("todo", "in_progress", "done")

# Multipliers of the total for the simulated days preceding "today"
BURNDOWN_DECAY = (1.0, 0.9, 0.8)


class EstimatedTask(Protocol):
    status: str
    estimation: float


# Pydantic models
class SprintInfo(BaseModel):
    id: Optional[int] = None
    name: str
    goal: Optional[str] = None
    estimation_type: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[str] = None


class EstimationSummary(BaseModel):
    total_estimation: float
    remaining_estimation: float
    completed_estimation: float
    progress_percentage: float


class BurndownPoint(BaseModel):
    day: int
    remaining: float


class SprintAnalytics(BaseModel):
    sprint_info: SprintInfo
    estimation_summary: EstimationSummary
    task_breakdown: Dict[str, int]
    burndown_chart: List[BurndownPoint]
    tasks: List[TaskRead]


# Aggregator
def _partial_sums(tasks: Iterable[EstimatedTask]) -> Tuple[float, float]:
    """Return ``(remaining, completed)`` accumulated in a single pass."""
    remaining = 0.0
    completed = 0.0
    for task in tasks:
        if task.status == DONE_STATUS:
            completed += task.estimation
        else:
            remaining += task.estimation
    return remaining, completed


def total_estimation(tasks: Iterable[EstimatedTask]) -> float:
    # total is exactly remaining + completed
    remaining, completed = _partial_sums(tasks)
    return remaining + completed


def remaining_estimation(tasks: Iterable[EstimatedTask]) -> float:
    return _partial_sums(tasks)[0]


def completed_estimation(tasks: Iterable[EstimatedTask]) -> float:
    return _partial_sums(tasks)[1]


def progress_percentage(tasks: Iterable[EstimatedTask]) -> float:
    """Share of the total estimation that is done, 0 for an empty sprint."""
    remaining, completed = _partial_sums(tasks)
    total = remaining + completed
    if total == 0:
        return 0
    return completed / total * 100


def status_breakdown(tasks: Iterable[EstimatedTask]) -> Dict[str, int]:
    """Count tasks per status.

    The three conventional statuses are always present. Any other status
    string gets its own key instead of being rejected or bucketed.
    """
    breakdown = {status: 0 for status in SEEDED_STATUSES}
    for task in tasks:
        breakdown[task.status] = breakdown.get(task.status, 0) + 1
    return breakdown


def refresh_estimation_cache(sprint: Any) -> Any:
    """Overwrite the sprint's cached estimation fields from its tasks."""
    remaining, completed = _partial_sums(sprint.tasks or [])
    sprint.total_estimation = remaining + completed
    sprint.remaining_estimation = remaining
    return sprint


# Assembler
def build_burndown(total: float, remaining: float) -> List[BurndownPoint]:
    """Simulated burndown: fixed decay of the total, then today's remaining work."""
    points = [
        BurndownPoint(day=day, remaining=total * factor)
        for day, factor in enumerate(BURNDOWN_DECAY, start=1)
    ]
    points.append(BurndownPoint(day=len(BURNDOWN_DECAY) + 1, remaining=remaining))
    return points


def build_sprint_analytics(sprint: Any) -> SprintAnalytics:
    """Assemble the analytics payload for a sprint with its tasks loaded."""

    tasks: Sequence[Any] = list(sprint.tasks or [])

    remaining, completed = _partial_sums(tasks)
    total = remaining + completed

    return SprintAnalytics(
        sprint_info=SprintInfo(
            id=sprint.id,
            name=sprint.name,
            goal=sprint.goal,
            estimation_type=sprint.estimation_type,
            start_date=sprint.start_date,
            end_date=sprint.end_date,
            status=sprint.status,
        ),
        estimation_summary=EstimationSummary(
            total_estimation=total,
            remaining_estimation=remaining,
            completed_estimation=completed,
            progress_percentage=completed / total * 100 if total else 0,
        ),
        task_breakdown=status_breakdown(tasks),
        burndown_chart=build_burndown(total, remaining),
        tasks=[TaskRead.model_validate(task) for task in tasks],
    )
