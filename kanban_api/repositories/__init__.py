from .sprint_repository import SprintRepository, SQLAlchemySprintRepository

__all__ = [
    "SprintRepository",
    "SQLAlchemySprintRepository",
]
