"""In-memory task store."""

from __future__ import annotations

import asyncio
import uuid
from typing import Optional

from app.domain.task import Task
from taskdesk_shared.schemas.common import TaskStatus


class InMemoryTaskStore:
    """Insertion-ordered dict of tasks. Writes are serialized by a lock."""

    def __init__(self) -> None:
        self._tasks: dict[uuid.UUID, Task] = {}
        self._lock = asyncio.Lock()

    async def save(self, task: Task) -> Task:
        async with self._lock:
            self._tasks[task.id] = task
        return task

    async def find_by_id(self, task_id: uuid.UUID) -> Optional[Task]:
        return self._tasks.get(task_id)

    async def find_all(self) -> list[Task]:
        return list(self._tasks.values())

    async def delete_by_id(self, task_id: uuid.UUID) -> None:
        async with self._lock:
            self._tasks.pop(task_id, None)

    async def find_by_status(self, status: TaskStatus) -> list[Task]:
        return [t for t in self._tasks.values() if t.status == status]

    async def count(self) -> int:
        return len(self._tasks)

    async def count_by_status(self, status: TaskStatus) -> int:
        return sum(1 for t in self._tasks.values() if t.status == status)

    async def commit(self) -> None:
        # Writes are visible as soon as save/delete return
        return None
