"""
Task endpoints: CRUD, status updates, queries, statistics and reports.

Status values: PENDING, IN_PROGRESS, BLOCKED, COMPLETED
- Priority is derived from status and returned with every task.
- Domain errors are mapped by the app's exception handlers:
  ValidationError -> 400, TaskNotFoundError -> 404,
  StatusTransitionUnavailable -> 204.
- Fixed paths are declared before /{task_id} so they are not parsed as ids.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import PlainTextResponse

from app.api.deps import get_task_service
from app.services import reports
from app.services.mapping import to_read, to_read_list
from app.services.tasks import TaskService
from taskdesk_shared.schemas.common import TaskStatus
from taskdesk_shared.schemas.tasks import (
    PriorityRead,
    TaskCreate,
    TaskDuration,
    TaskRead,
    TaskStatistics,
    TaskStatusStatistics,
    TaskStatusUpdate,
)

router = APIRouter()
log = structlog.get_logger()


def _utc(value: datetime) -> datetime:
    # Naive query timestamps are read as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[TaskRead])
async def list_tasks_endpoint(
    status: Optional[TaskStatus] = None,
    service: TaskService = Depends(get_task_service),
):
    """List all tasks, optionally filtered by status."""
    if status:
        tasks = await service.list_tasks_by_status(status)
    else:
        tasks = await service.list_tasks()
    return to_read_list(tasks)


@router.post("/", response_model=TaskRead, status_code=201)
async def create_task_endpoint(
    task_in: TaskCreate,
    service: TaskService = Depends(get_task_service),
):
    """Create a new task. Blank title or missing description -> 400."""
    task = await service.create_task(task_in.title, task_in.description)
    return to_read(task)


@router.get("/search", response_model=List[TaskRead])
async def search_tasks_endpoint(
    q: str = "",
    service: TaskService = Depends(get_task_service),
):
    """Case-insensitive search over title and description. Empty q lists everything."""
    return to_read_list(await service.search_tasks(q))


@router.get("/title/{title}", response_model=TaskRead)
async def find_task_by_title_endpoint(
    title: str,
    service: TaskService = Depends(get_task_service),
):
    task = await service.find_task_by_title(title)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return to_read(task)


@router.get("/latest", response_model=TaskRead)
async def latest_task_endpoint(service: TaskService = Depends(get_task_service)):
    task = await service.latest_task()
    if task is None:
        raise HTTPException(status_code=404, detail="No tasks yet")
    return to_read(task)


@router.get("/priority/{value}", response_model=List[TaskRead])
async def list_tasks_by_priority_endpoint(
    value: int,
    service: TaskService = Depends(get_task_service),
):
    """Tasks with the given priority value (1-3), newest first."""
    return to_read_list(await service.list_tasks_by_priority(value))


@router.get("/overdue", response_model=List[TaskRead])
async def list_overdue_tasks_endpoint(
    before: Optional[datetime] = None,
    service: TaskService = Depends(get_task_service),
):
    """Unfinished tasks created before `before` (default: now), newest first."""
    cutoff = _utc(before or datetime.now(timezone.utc))
    return to_read_list(await service.list_overdue_tasks(cutoff))


@router.get("/created-between", response_model=List[TaskRead])
async def list_tasks_created_between_endpoint(
    start: datetime,
    end: datetime,
    service: TaskService = Depends(get_task_service),
):
    """Tasks created within [start, end], both ends inclusive."""
    return to_read_list(await service.list_tasks_created_between(_utc(start), _utc(end)))


@router.get("/to-complete", response_model=List[TaskRead])
async def list_tasks_to_complete_endpoint(
    min_priority: int = Query(1, ge=1, le=3),
    limit: int = Query(10, ge=0, le=100),
    service: TaskService = Depends(get_task_service),
):
    """Open tasks ordered by urgency, then age."""
    return to_read_list(await service.list_priority_tasks_to_complete(min_priority, limit))


@router.get("/has-status/{status}", response_model=bool)
async def has_task_with_status_endpoint(
    status: TaskStatus,
    service: TaskService = Depends(get_task_service),
):
    return await service.has_task_with_status(status)


# ---------------------------------------------------------------------------
# Statistics and reports
# ---------------------------------------------------------------------------


@router.get("/statistics", response_model=TaskStatistics)
async def task_statistics_endpoint(service: TaskService = Depends(get_task_service)):
    return await service.get_statistics()


@router.get("/status-statistics", response_model=TaskStatusStatistics)
async def task_status_statistics_endpoint(service: TaskService = Depends(get_task_service)):
    """Per-status count with oldest and newest creation time."""
    return reports.status_statistics(await service.list_tasks())


@router.get("/report", response_class=PlainTextResponse)
async def task_report_endpoint(service: TaskService = Depends(get_task_service)):
    return reports.generate_report(await service.list_tasks(), datetime.now(timezone.utc))


@router.get("/group-by-status", response_model=Dict[TaskStatus, List[TaskRead]])
async def group_tasks_by_status_endpoint(service: TaskService = Depends(get_task_service)):
    groups = await service.group_by_status()
    return {status: to_read_list(tasks) for status, tasks in groups.items()}


@router.post("/analyze-durations", response_model=List[str])
async def analyze_durations_endpoint(durations: List[TaskDuration]):
    return reports.analyze_durations(durations)


# ---------------------------------------------------------------------------
# Single task
# ---------------------------------------------------------------------------


@router.get("/{task_id}", response_model=TaskRead)
async def get_task_endpoint(
    task_id: uuid.UUID,
    service: TaskService = Depends(get_task_service),
):
    task = await service.get_task(task_id)
    if task is None:
        log.warning("task.not_found", task_id=str(task_id))
        raise HTTPException(status_code=404, detail="Task not found")
    return to_read(task)


@router.get("/{task_id}/summary", response_class=PlainTextResponse)
async def task_summary_endpoint(
    task_id: uuid.UUID,
    service: TaskService = Depends(get_task_service),
):
    return reports.summarize_task(await service.require_task(task_id))


@router.get("/{task_id}/description", response_class=PlainTextResponse)
async def describe_task_endpoint(
    task_id: uuid.UUID,
    service: TaskService = Depends(get_task_service),
):
    return reports.describe(await service.require_task(task_id))


@router.get("/{task_id}/priority", response_model=PriorityRead)
async def task_priority_endpoint(
    task_id: uuid.UUID,
    service: TaskService = Depends(get_task_service),
):
    return PriorityRead.from_priority(await service.get_priority(task_id))


@router.patch("/{task_id}/status", response_model=TaskRead)
async def update_task_status_endpoint(
    task_id: uuid.UUID,
    body: TaskStatusUpdate,
    service: TaskService = Depends(get_task_service),
):
    """Change a task's status. Priority and updated_at follow automatically."""
    task = await service.update_status(task_id, body.status)
    return to_read(task)


@router.delete("/{task_id}", status_code=204)
async def delete_task_endpoint(
    task_id: uuid.UUID,
    service: TaskService = Depends(get_task_service),
):
    """Delete a task. Deleting an unknown id is not an error."""
    await service.delete_task(task_id)
    return Response(status_code=204)
