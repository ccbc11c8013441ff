"""
Tests for SprintService against an in-memory repository.
"""
import itertools

import pytest

from kanban_api.core.exceptions import InvalidStatusTransitionError, ValidationError
from kanban_api.models import Task
from kanban_api.repositories import SprintRepository
from kanban_api.services.project_service import ProjectNotFoundError
from kanban_api.services.sprint_service import (
    SprintNotFoundError,
    SprintService,
    is_valid_sprint_status,
)


class InMemorySprintRepository(SprintRepository):
    """Keeps transient Sprint objects in a dict."""

    def __init__(self, project_ids=(1,)):
        self.project_ids = set(project_ids)
        self.sprints = {}
        self.saves = 0
        self._ids = itertools.count(1)

    async def get_with_tasks(self, sprint_id):
        return self.sprints.get(sprint_id)

    async def list_with_tasks(self, project_id=None):
        return [
            sprint for sprint in self.sprints.values()
            if project_id is None or sprint.project_id == project_id
        ]

    async def add(self, sprint):
        sprint.id = next(self._ids)
        self.sprints[sprint.id] = sprint
        return sprint

    async def save(self, sprint):
        self.saves += 1
        return sprint

    async def project_exists(self, project_id):
        return project_id in self.project_ids


@pytest.fixture
def repository():
    return InMemorySprintRepository(project_ids=(1, 2))


@pytest.fixture
def service(repository):
    return SprintService(repository, enforce_transitions=False)


async def create(service, project_id=1, status="planned", **kwargs):
    return await service.create_sprint(
        project_id=project_id,
        name=kwargs.pop("name", "Sprint"),
        estimation_type=kwargs.pop("estimation_type", "hour"),
        status=status,
        **kwargs,
    )


def add_tasks(sprint, *pairs):
    for status, estimation in pairs:
        sprint.tasks.append(Task(title=status, status=status, estimation=estimation))


class TestCreateSprint:

    async def test_create_returns_recomputed_cache(self, service):
        sprint = await create(service, total_estimation=40.0, remaining_estimation=40.0)

        assert sprint.id == 1
        assert sprint.total_estimation == 0
        assert sprint.remaining_estimation == 0

    async def test_missing_fields(self, service):
        with pytest.raises(ValidationError, match="Missing required fields"):
            await create(service, name="")

        with pytest.raises(ValidationError):
            await create(service, status="")

    async def test_unknown_project(self, service):
        with pytest.raises(ProjectNotFoundError):
            await create(service, project_id=99)


class TestSprintReads:

    async def test_get_recomputes_stale_cache(self, service, repository):
        sprint = await create(service)
        add_tasks(sprint, ("todo", 5), ("done", 3), ("in_progress", 2))
        sprint.total_estimation = 1000.0
        sprint.remaining_estimation = 1000.0

        fetched = await service.get_sprint(sprint.id)

        assert fetched.total_estimation == 10
        assert fetched.remaining_estimation == 7

    async def test_get_unknown_sprint(self, service):
        with pytest.raises(SprintNotFoundError) as exc_info:
            await service.get_sprint(42)

        assert exc_info.value.sprint_id == 42
        assert exc_info.value.status_code == 404

    async def test_list_filters_by_project(self, service):
        first = await create(service, project_id=1)
        second = await create(service, project_id=2)
        add_tasks(second, ("todo", 4))

        all_sprints = await service.list_sprints()
        project_two = await service.list_sprints(project_id=2)

        assert {s.id for s in all_sprints} == {first.id, second.id}
        assert [s.id for s in project_two] == [second.id]
        assert project_two[0].total_estimation == 4

    async def test_analytics(self, service):
        sprint = await create(service, name="Analytics Sprint", estimation_type="story_point")
        add_tasks(sprint, ("todo", 8), ("done", 5), ("in_progress", 3), ("done", 2))

        analytics = await service.get_sprint_analytics(sprint.id)

        assert analytics.sprint_info.name == "Analytics Sprint"
        assert analytics.estimation_summary.total_estimation == 18
        assert analytics.estimation_summary.remaining_estimation == 11
        assert analytics.estimation_summary.completed_estimation == 7
        assert analytics.task_breakdown == {"todo": 1, "in_progress": 1, "done": 2}

    async def test_analytics_unknown_sprint(self, service):
        with pytest.raises(SprintNotFoundError):
            await service.get_sprint_analytics(5)


class TestSprintLifecycle:

    async def test_any_status_is_accepted(self, service, repository):
        sprint = await create(service)

        for status in ["completed", "planned", "on-hold", "active"]:
            updated = await service.update_sprint_status(sprint.id, status)
            assert updated.status == status

        assert repository.saves == 4

    async def test_unknown_sprint(self, service):
        with pytest.raises(SprintNotFoundError):
            await service.update_sprint_status(3, "active")

    async def test_empty_status_rejected(self, service):
        sprint = await create(service)
        with pytest.raises(ValidationError):
            await service.update_sprint_status(sprint.id, "")

    async def test_enforced_transitions(self, repository):
        service = SprintService(repository, enforce_transitions=True)
        sprint = await create(service)

        assert (await service.update_sprint_status(sprint.id, "active")).status == "active"

        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            await service.update_sprint_status(sprint.id, "planned")
        assert exc_info.value.status_code == 409

        assert (await service.update_sprint_status(sprint.id, "completed")).status == "completed"

        with pytest.raises(InvalidStatusTransitionError):
            await service.update_sprint_status(sprint.id, "active")

    async def test_enforced_transitions_reject_unknown_status(self, repository):
        service = SprintService(repository, enforce_transitions=True)
        sprint = await create(service)

        with pytest.raises(InvalidStatusTransitionError):
            await service.update_sprint_status(sprint.id, "on-hold")

    async def test_enforced_transitions_from_legacy_status(self, repository):
        service = SprintService(repository, enforce_transitions=True)
        sprint = await create(service, status="draft")

        assert (await service.update_sprint_status(sprint.id, "completed")).status == "completed"


def test_is_valid_sprint_status():
    assert is_valid_sprint_status("planned")
    assert is_valid_sprint_status("active")
    assert is_valid_sprint_status("completed")
    assert not is_valid_sprint_status("blocked")
    assert not is_valid_sprint_status(None)

