"""
Reactive task endpoints backed by the streaming in-memory service.

- GET / streams every task as an SSE `task` event, one per delay interval
- The remaining endpoints mirror the plain task API without events or guards
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sse_starlette.sse import EventSourceResponse

from app.api.deps import get_reactive_service
from app.services.mapping import to_read
from app.services.reactive import ReactiveTaskService
from taskdesk_shared.schemas.tasks import TaskCreate, TaskRead, TaskStatusUpdate

router = APIRouter()


@router.post("/", response_model=TaskRead, status_code=201)
async def create_reactive_task_endpoint(
    task_in: TaskCreate,
    service: ReactiveTaskService = Depends(get_reactive_service),
):
    task = await service.create_task(task_in.title, task_in.description)
    return to_read(task)


@router.get("/")
async def stream_reactive_tasks_endpoint(
    service: ReactiveTaskService = Depends(get_reactive_service),
):
    """Stream tasks as Server-Sent Events, delayed per item. Disconnects cancel the stream."""

    async def generator():
        async for task in service.stream_tasks():
            yield {
                "event": "task",
                "id": str(task.id),
                "data": to_read(task).model_dump_json(),
            }

    return EventSourceResponse(generator())


@router.get("/{task_id}", response_model=TaskRead)
async def get_reactive_task_endpoint(
    task_id: uuid.UUID,
    service: ReactiveTaskService = Depends(get_reactive_service),
):
    task = await service.get_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return to_read(task)


@router.patch("/{task_id}/status", response_model=TaskRead)
async def update_reactive_task_status_endpoint(
    task_id: uuid.UUID,
    body: TaskStatusUpdate,
    service: ReactiveTaskService = Depends(get_reactive_service),
):
    task = await service.update_status(task_id, body.status)
    return to_read(task)


@router.delete("/{task_id}", status_code=204)
async def delete_reactive_task_endpoint(
    task_id: uuid.UUID,
    service: ReactiveTaskService = Depends(get_reactive_service),
):
    await service.delete_task(task_id)
    return Response(status_code=204)
