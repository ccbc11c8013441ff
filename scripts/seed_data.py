#!/usr/bin/env python3
"""
Seed Data Script for the Kanban Tracker

Creates realistic data for development:
- 4 Users
- 1 Project with all users as participants
- 2 Sprints (one completed, one active)
- A handful of tasks per sprint

Usage:
    python scripts/seed_data.py              # Add seed data
    python scripts/seed_data.py --clear      # Clear all data first
"""
import asyncio
import sys
import os
from datetime import datetime, timedelta, timezone
from sqlalchemy import delete

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kanban_api.database import async_session, create_tables, engine
from kanban_api.models import User, Project, Sprint, Task, project_users
from kanban_api.core.security import hash_password


# ==================== DATA DEFINITIONS ====================

USERS_DATA = [
    {"username": "alice", "email": "alice@company.com"},
    {"username": "bob", "email": "bob@company.com"},
    {"username": "carol", "email": "carol@company.com"},
    {"username": "dave", "email": "dave@company.com"},
]

DEFAULT_PASSWORD = "password123"

SPRINTS_DATA = [
    {
        "name": "Sprint 1",
        "goal": "Board skeleton and authentication",
        "estimation_type": "story_point",
        "status": "completed",
        "offset_days": -14,
        "tasks": [
            ("Set up project skeleton", "done", 3, "alice"),
            ("User registration", "done", 5, "bob"),
            ("JWT login", "done", 3, "bob"),
            ("Project CRUD", "done", 8, "carol"),
        ],
    },
    {
        "name": "Sprint 2",
        "goal": "Sprints, tasks and analytics",
        "estimation_type": "story_point",
        "status": "active",
        "offset_days": 0,
        "tasks": [
            ("Sprint CRUD", "done", 5, "alice"),
            ("Task assignment", "in_progress", 3, "dave"),
            ("Sprint analytics endpoint", "in_progress", 8, "carol"),
            ("Burndown chart", "todo", 5, None),
            ("Fix flaky login test", "blocked", 2, "bob"),
        ],
    },
]


async def clear_data():
    """Remove all rows, children first"""
    async with async_session() as session:
        for table in (Task.__table__, Sprint.__table__, project_users, Project.__table__, User.__table__):
            await session.execute(delete(table))
        await session.commit()
    print("Cleared existing data")


async def seed():
    await create_tables()

    async with async_session() as session:
        users = {}
        for data in USERS_DATA:
            user = User(password_hash=hash_password(DEFAULT_PASSWORD), **data)
            session.add(user)
            users[data["username"]] = user

        project = Project(
            name="Kanban Board",
            description="Internal kanban tracker",
            participants=list(users.values()),
        )
        session.add(project)
        await session.flush()

        today = datetime.now(timezone.utc).replace(hour=9, minute=0, second=0, microsecond=0)
        for data in SPRINTS_DATA:
            start = today + timedelta(days=data["offset_days"])
            sprint = Sprint(
                project_id=project.id,
                name=data["name"],
                goal=data["goal"],
                estimation_type=data["estimation_type"],
                status=data["status"],
                start_date=start,
                end_date=start + timedelta(days=13),
            )
            session.add(sprint)
            await session.flush()

            for title, status, estimation, assignee in data["tasks"]:
                session.add(Task(
                    title=title,
                    status=status,
                    estimation=estimation,
                    sprint_id=sprint.id,
                    assign_to=users[assignee].id if assignee else None,
                ))

            total = sum(task[2] for task in data["tasks"])
            print(f"  {data['name']}: {len(data['tasks'])} tasks, {total} points")

        await session.commit()

    print(f"Seeded {len(USERS_DATA)} users (password: {DEFAULT_PASSWORD}), 1 project, {len(SPRINTS_DATA)} sprints")


async def main():
    if "--clear" in sys.argv:
        await clear_data()
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
