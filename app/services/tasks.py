"""
Task service layer: business logic over an injected task store.

Handles:
- Validated task creation and hard deletion
- Status transitions with the optional Blocked-transition guard
- Read-side queries (status, priority, text search, creation date)
- Aggregates (counts by status, grouping)
- TaskCreated / TaskCompleted events once the write is committed
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from datetime import datetime
from typing import Optional

import structlog

from app.core.errors import (
    StatusTransitionUnavailable,
    TaskNotFoundError,
    ValidationError,
)
from app.core.events import EventSink, NullEventSink, TaskCompleted, TaskCreated, TaskEvent
from app.domain.task import Task
from app.repositories.base import TaskStore
from taskdesk_shared.schemas.common import TaskPriority, TaskStatus, statuses_for_priority
from taskdesk_shared.schemas.tasks import TaskStatistics

log = structlog.get_logger()


class TaskService:
    def __init__(
        self,
        store: TaskStore,
        events: Optional[EventSink] = None,
        *,
        block_transitions_from_blocked: bool = False,
    ):
        self.store = store
        self.events = events or NullEventSink()
        self.block_transitions_from_blocked = block_transitions_from_blocked

    async def _emit(self, event: TaskEvent) -> None:
        try:
            await self.events.publish(event)
        except Exception:
            log.exception("event.publish_failed", event_type=event.event_type, task_id=str(event.task_id))

    # -----------------------------------------------------------------------
    # CRUD
    # -----------------------------------------------------------------------

    async def create_task(self, title: Optional[str], description: Optional[str]) -> Task:
        task = Task.create(title, description)
        saved = await self.store.save(task)
        await self.store.commit()
        log.info("task.saved", task_id=str(saved.id), title=saved.title)

        await self._emit(TaskCreated.from_task(saved))
        return saved

    async def get_task(self, task_id: uuid.UUID) -> Optional[Task]:
        return await self.store.find_by_id(task_id)

    async def require_task(self, task_id: uuid.UUID) -> Task:
        task = await self.store.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def list_tasks(self) -> list[Task]:
        return await self.store.find_all()

    async def list_tasks_by_status(self, status: TaskStatus) -> list[Task]:
        return await self.store.find_by_status(status)

    async def update_status(self, task_id: uuid.UUID, new_status: TaskStatus) -> Task:
        task = await self.require_task(task_id)

        if self.block_transitions_from_blocked and task.status == TaskStatus.BLOCKED:
            log.info(
                "task.transition_rejected",
                task_id=str(task_id),
                from_status=task.status.value,
                to_status=TaskStatus(new_status).value,
            )
            raise StatusTransitionUnavailable(task_id, task.status, TaskStatus(new_status))

        updated = await self.store.save(task.with_status(new_status))
        await self.store.commit()
        log.info(
            "task.status_updated",
            task_id=str(task_id),
            from_status=task.status.value,
            to_status=updated.status.value,
            priority=updated.priority.label,
        )

        if updated.status == TaskStatus.COMPLETED:
            await self._emit(TaskCompleted.from_task(updated))
        return updated

    async def delete_task(self, task_id: uuid.UUID) -> None:
        await self.store.delete_by_id(task_id)
        await self.store.commit()
        log.info("task.deleted", task_id=str(task_id))

    # -----------------------------------------------------------------------
    # Priority
    # -----------------------------------------------------------------------

    async def get_priority(self, task_id: uuid.UUID) -> TaskPriority:
        task = await self.require_task(task_id)
        return task.priority

    async def list_tasks_by_priority(self, value: int) -> list[Task]:
        """Tasks whose derived priority has this value, newest first."""
        try:
            priority = TaskPriority.from_value(value)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        tasks: list[Task] = []
        for status in statuses_for_priority(priority):
            tasks.extend(await self.store.find_by_status(status))
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    async def list_priority_tasks_to_complete(self, min_priority: int = 1, limit: int = 10) -> list[Task]:
        """Open tasks at or above a priority, most urgent then oldest first."""
        if limit < 0:
            raise ValidationError("limit must not be negative")
        candidates = [
            t for t in await self.store.find_all()
            if t.status != TaskStatus.COMPLETED and t.priority.level >= min_priority
        ]
        candidates.sort(key=lambda t: (-t.priority.level, t.created_at))
        return candidates[:limit]

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    async def search_tasks(self, term: Optional[str]) -> list[Task]:
        """Case-insensitive substring match on title or description."""
        tasks = await self.store.find_all()
        if term is None or not term.strip():
            return tasks
        needle = term.casefold()
        return [
            t for t in tasks
            if needle in t.title.casefold() or needle in t.description.casefold()
        ]

    async def find_task_by_title(self, term: str) -> Optional[Task]:
        needle = term.casefold()
        for task in await self.store.find_all():
            if needle in task.title.casefold():
                return task
        return None

    async def list_tasks_created_before(self, cutoff: datetime) -> list[Task]:
        tasks = [t for t in await self.store.find_all() if t.created_at < cutoff]
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    async def list_tasks_created_between(self, start: datetime, end: datetime) -> list[Task]:
        return [t for t in await self.store.find_all() if start <= t.created_at <= end]

    async def list_overdue_tasks(self, cutoff: datetime) -> list[Task]:
        return [
            t for t in await self.list_tasks_created_before(cutoff)
            if t.status != TaskStatus.COMPLETED
        ]

    async def latest_task(self) -> Optional[Task]:
        tasks = await self.store.find_all()
        return max(tasks, key=lambda t: t.created_at, default=None)

    async def has_task_with_status(self, status: TaskStatus) -> bool:
        return await self.store.count_by_status(status) > 0

    # -----------------------------------------------------------------------
    # Aggregates
    # -----------------------------------------------------------------------

    async def count(self) -> int:
        return await self.store.count()

    async def count_by_status(self) -> dict[TaskStatus, int]:
        """Counts over all four statuses, computed from one snapshot."""
        counts = {status: 0 for status in TaskStatus}
        for task in await self.store.find_all():
            counts[task.status] += 1
        return counts

    async def get_statistics(self) -> TaskStatistics:
        counts = await self.count_by_status()
        return TaskStatistics(
            total=sum(counts.values()),
            pending=counts[TaskStatus.PENDING],
            in_progress=counts[TaskStatus.IN_PROGRESS],
            blocked=counts[TaskStatus.BLOCKED],
            completed=counts[TaskStatus.COMPLETED],
        )

    async def group_by_status(self) -> dict[TaskStatus, list[Task]]:
        groups: dict[TaskStatus, list[Task]] = defaultdict(list)
        for task in await self.store.find_all():
            groups[task.status].append(task)
        return dict(groups)
