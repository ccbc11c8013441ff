"""
Shared test fixtures for the Kanban Tracker API tests.
"""
import os

os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from kanban_api.core.auth import create_access_token
from kanban_api.core.security import hash_password
from kanban_api.database import create_tables, get_db
from kanban_api.main import app
from kanban_api.models import User


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_factory):
    """Async HTTP client for testing FastAPI endpoints.

    ASGITransport does not run the lifespan, so tables come from the
    ``engine`` fixture and every request gets its own session.
    """

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def user(session_factory):
    """A registered user stored directly in the database."""
    async with session_factory() as session:
        user = User(username="alice", email="alice@example.com", password_hash=hash_password("wonderland"))
        session.add(user)
        await session.commit()
        return user


@pytest.fixture
def auth_headers(user):
    token = create_access_token({"sub": user.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_client(client, auth_headers):
    """Client that sends a valid bearer token with every request."""
    client.headers.update(auth_headers)
    return client


@pytest.fixture
def sprint_payload():
    """Build a sprint creation payload for a project."""

    def _payload(project_id, **overrides):
        payload = {
            "project_id": project_id,
            "name": "Sprint 1",
            "goal": "Ship the board",
            "estimation_type": "story_point",
            "start_date": "2025-01-06T09:00:00Z",
            "end_date": "2025-01-17T17:00:00Z",
            "status": "planned",
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
async def project_id(auth_client):
    response = await auth_client.post(
        "/api/v1/projects",
        json={"name": "Board", "description": "Kanban board rewrite"},
    )
    assert response.status_code == 201
    return response.json()["data"]["id"]


@pytest.fixture
async def make_sprint(auth_client, sprint_payload):
    """Create a sprint, optionally with tasks given as (status, estimation) pairs."""

    async def _make(project_id, tasks=(), **overrides):
        response = await auth_client.post("/api/v1/sprints", json=sprint_payload(project_id, **overrides))
        assert response.status_code == 200, response.text
        sprint_id = response.json()["data"]["id"]

        for index, (status, estimation) in enumerate(tasks, start=1):
            task_response = await auth_client.post(
                "/api/v1/tasks",
                json={
                    "title": f"Task {index}",
                    "status": status,
                    "sprint_id": sprint_id,
                    "estimation": estimation,
                },
            )
            assert task_response.status_code == 200, task_response.text

        return sprint_id

    return _make
