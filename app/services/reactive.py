"""
Streaming variant of the task service.

Keeps its own in-memory store and yields listings one task at a time with a
fixed delay before each item. There is no backpressure beyond that delay.
"""

from __future__ import annotations

import asyncio
import uuid
from typing import AsyncIterator, Optional

import structlog

from app.core.errors import TaskNotFoundError
from app.domain.task import Task
from app.repositories.memory import InMemoryTaskStore
from taskdesk_shared.schemas.common import TaskStatus

log = structlog.get_logger()


class ReactiveTaskService:
    def __init__(self, store: Optional[InMemoryTaskStore] = None, delay_seconds: float = 1.0):
        self.store = store or InMemoryTaskStore()
        self.delay_seconds = delay_seconds

    async def create_task(self, title: Optional[str], description: Optional[str]) -> Task:
        return await self.store.save(Task.create(title, description))

    async def get_task(self, task_id: uuid.UUID) -> Optional[Task]:
        return await self.store.find_by_id(task_id)

    async def stream_tasks(self) -> AsyncIterator[Task]:
        # Emits the snapshot taken when iteration starts
        for task in await self.store.find_all():
            await asyncio.sleep(self.delay_seconds)
            yield task

    async def update_status(self, task_id: uuid.UUID, new_status: TaskStatus) -> Task:
        task = await self.store.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return await self.store.save(task.with_status(new_status))

    async def delete_task(self, task_id: uuid.UUID) -> None:
        await self.store.delete_by_id(task_id)
        log.debug("reactive.task.deleted", task_id=str(task_id))
