"""
API v1 Router

Task endpoints live under /tasks, the streaming variant under /reactive/tasks.
"""

from fastapi import APIRouter
from . import reactive, tasks

router = APIRouter()

router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
router.include_router(reactive.router, prefix="/reactive/tasks", tags=["Reactive Tasks"])


@router.get("/", tags=["API"])
async def api_root():
    """API root: returns version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/tasks",
            "/tasks/search",
            "/tasks/statistics",
            "/tasks/status-statistics",
            "/tasks/report",
            "/reactive/tasks",
        ],
    }
