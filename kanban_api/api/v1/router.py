from fastapi import APIRouter, Depends

from ...core.auth import get_current_user
from .auth import router as auth_router
from .projects import router as projects_router
from .sprints import router as sprints_router
from .tasks import router as tasks_router

api_router = APIRouter()

authenticated = [Depends(get_current_user)]

# Include all sub-routers
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(projects_router, prefix="/projects", tags=["projects"], dependencies=authenticated)
api_router.include_router(sprints_router, prefix="/sprints", tags=["sprints"], dependencies=authenticated)
api_router.include_router(tasks_router, prefix="/tasks", tags=["tasks"], dependencies=authenticated)
