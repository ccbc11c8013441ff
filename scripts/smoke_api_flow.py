#!/usr/bin/env python3
"""
API Flow Smoke Script

Walks a running server through register, login, project, sprint, tasks and
the sprint analytics endpoint, printing every response.

Usage:
    uvicorn kanban_api.main:app --reload   # in another shell
    python scripts/smoke_api_flow.py
"""

import json
import uuid

import requests

BASE_URL = "http://localhost:8000"
API_URL = f"{BASE_URL}/api/v1"


def print_section(title: str):
    """Print a formatted section header"""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_response(response: requests.Response):
    """Pretty print API response"""
    print(f"\nStatus Code: {response.status_code}")
    try:
        data = response.json()
        print(f"Response:\n{json.dumps(data, indent=2)}")
    except ValueError:
        print(f"Response: {response.text}")


def check_health():
    print_section("Health Check")
    response = requests.get(f"{BASE_URL}/health")
    print_response(response)
    assert response.status_code == 200, "Health check failed"


def login() -> dict:
    print_section("Register and Login")
    username = f"smoke-{uuid.uuid4().hex[:8]}"
    credentials = {"username": username, "password": "password123"}

    response = requests.post(f"{API_URL}/auth/register", json=credentials)
    print_response(response)
    assert response.status_code == 200, "Registration failed"

    response = requests.post(f"{API_URL}/auth/login", json=credentials)
    print_response(response)
    assert response.status_code == 200, "Login failed"

    return {"Authorization": f"Bearer {response.json()['token']}"}


def create_sprint_with_tasks(headers: dict) -> int:
    print_section("Project, Sprint and Tasks")

    response = requests.post(
        f"{API_URL}/projects",
        json={"name": "Smoke Project", "description": "Created by smoke_api_flow.py"},
        headers=headers,
    )
    print_response(response)
    project_id = response.json()["data"]["id"]

    response = requests.post(
        f"{API_URL}/sprints",
        json={
            "project_id": project_id,
            "name": "Smoke Sprint",
            "goal": "Exercise the analytics endpoint",
            "estimation_type": "story_point",
            "status": "active",
        },
        headers=headers,
    )
    print_response(response)
    sprint_id = response.json()["data"]["id"]

    for title, status, estimation in [
        ("Design", "todo", 8),
        ("Build", "done", 5),
        ("Review", "in_progress", 3),
        ("Deploy", "done", 2),
    ]:
        response = requests.post(
            f"{API_URL}/tasks",
            json={"title": title, "status": status, "estimation": estimation, "sprint_id": sprint_id},
            headers=headers,
        )
        assert response.status_code == 200, f"Creating task {title} failed"

    return sprint_id


def show_analytics(headers: dict, sprint_id: int):
    print_section(f"Analytics for Sprint {sprint_id}")
    response = requests.get(f"{API_URL}/sprints/{sprint_id}/analytics", headers=headers)
    print_response(response)

    summary = response.json()["data"]["estimation_summary"]
    assert summary["total_estimation"] == 18
    assert summary["remaining_estimation"] == 11
    print(f"\nProgress: {summary['progress_percentage']:.1f}%")


def run_flow():
    try:
        check_health()
        headers = login()
        sprint_id = create_sprint_with_tasks(headers)
        show_analytics(headers, sprint_id)
        print_section("ALL STEPS COMPLETED")
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
    except requests.ConnectionError:
        print(f"\n\nCould not reach {BASE_URL}; is the server running?")


if __name__ == "__main__":
    run_flow()
