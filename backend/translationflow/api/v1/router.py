"""Main API v1 router aggregating all sub-routers."""
from fastapi import APIRouter

from translationflow.api.v1.health import router as health_router
from translationflow.api.v1.projects import router as projects_router
from translationflow.api.v1.videos import router as videos_router
from translationflow.api.v1.workflow import router as workflow_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["Health"])
api_router.include_router(workflow_router, tags=["Workflow"])
api_router.include_router(projects_router, prefix="/projects", tags=["Projects"])
api_router.include_router(videos_router, prefix="/projects", tags=["Videos"])
