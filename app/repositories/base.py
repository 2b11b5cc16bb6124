"""Store contract consumed by the task services."""

from __future__ import annotations

import uuid
from typing import Optional, Protocol

from app.domain.task import Task
from taskdesk_shared.schemas.common import TaskStatus


class TaskStore(Protocol):
    """Key-value persistence for tasks, keyed by task id.

    Implementations must return saved tasks with every field intact and give
    last-writer-wins semantics for concurrent saves of the same id.
    """

    async def save(self, task: Task) -> Task: ...

    async def find_by_id(self, task_id: uuid.UUID) -> Optional[Task]: ...

    async def find_all(self) -> list[Task]: ...

    async def delete_by_id(self, task_id: uuid.UUID) -> None: ...

    async def find_by_status(self, status: TaskStatus) -> list[Task]: ...

    async def count(self) -> int: ...

    async def count_by_status(self, status: TaskStatus) -> int: ...

    async def commit(self) -> None:
        """Make every write so far durable. Events are only published after this."""
        ...
