"""Projection of Task entities onto response schemas."""

from __future__ import annotations

from typing import Iterable

from app.domain.task import Task
from taskdesk_shared.schemas.tasks import PriorityRead, TaskRead


def to_read(task: Task) -> TaskRead:
    return TaskRead(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=PriorityRead.from_priority(task.priority),
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def to_read_list(tasks: Iterable[Task]) -> list[TaskRead]:
    return [to_read(t) for t in tasks]
