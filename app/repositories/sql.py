"""Relational task store backed by SQLModel/SQLAlchemy."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.domain.task import Task
from app.models.task import TaskRecord
from taskdesk_shared.schemas.common import TaskStatus


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back out
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_task(record: TaskRecord) -> Task:
    return Task(
        id=record.id,
        title=record.title,
        description=record.description,
        status=TaskStatus(record.status),
        created_at=_aware(record.created_at),
        updated_at=_aware(record.updated_at),
    )


class SqlTaskStore:
    """Task store over an AsyncSession. Writes are flushed and wait for `commit()`;
    the caller's session scope rolls back anything left uncommitted."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, task: Task) -> Task:
        record = await self.session.get(TaskRecord, task.id)
        if record is None:
            record = TaskRecord(id=task.id, created_at=task.created_at)
        record.title = task.title
        record.description = task.description
        record.status = task.status.value
        record.updated_at = task.updated_at

        self.session.add(record)
        await self.session.flush()
        return task

    async def find_by_id(self, task_id: uuid.UUID) -> Optional[Task]:
        record = await self.session.get(TaskRecord, task_id)
        return _to_task(record) if record else None

    async def find_all(self) -> list[Task]:
        result = await self.session.execute(select(TaskRecord))
        return [_to_task(r) for r in result.scalars().all()]

    async def delete_by_id(self, task_id: uuid.UUID) -> None:
        record = await self.session.get(TaskRecord, task_id)
        if record is not None:
            await self.session.delete(record)
            await self.session.flush()

    async def find_by_status(self, status: TaskStatus) -> list[Task]:
        result = await self.session.execute(
            select(TaskRecord).where(TaskRecord.status == TaskStatus(status).value)
        )
        return [_to_task(r) for r in result.scalars().all()]

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(TaskRecord))
        return result.scalar_one()

    async def count_by_status(self, status: TaskStatus) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(TaskRecord)
            .where(TaskRecord.status == TaskStatus(status).value)
        )
        return result.scalar_one()

    async def commit(self) -> None:
        await self.session.commit()
