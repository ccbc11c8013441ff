from .base import Base, BaseModel, UTCDateTime
from .user import User
from .project import Project, project_users
from .sprint import Sprint
from .task import Task

__all__ = [
    "Base",
    "BaseModel",
    "UTCDateTime",
    "User",
    "Project",
    "project_users",
    "Sprint",
    "Task",
]
