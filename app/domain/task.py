"""Task entity: an immutable value whose priority is always derived from its status."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.errors import ValidationError
from taskdesk_shared.schemas.common import TaskPriority, TaskStatus, priority_for_status


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    title: str
    description: str
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def priority(self) -> TaskPriority:
        return priority_for_status(self.status)

    @classmethod
    def create(
        cls,
        title: Optional[str],
        description: Optional[str],
        *,
        now: Optional[datetime] = None,
    ) -> "Task":
        """Validated factory. New tasks always start out PENDING."""
        if title is None or not title.strip():
            raise ValidationError("Task title cannot be empty")
        if description is None:
            raise ValidationError("Task description cannot be null")

        now = now or _utcnow()
        return cls(
            title=title,
            description=description,
            status=TaskStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    def with_status(self, new_status: TaskStatus, *, now: Optional[datetime] = None) -> "Task":
        """Return a copy with the new status and a refreshed updated_at."""
        now = now or _utcnow()
        # updated_at never falls behind created_at, even with a skewed clock
        updated_at = max(now, self.created_at, self.updated_at)
        return self.model_copy(
            update={"status": TaskStatus(new_status), "updated_at": updated_at}
        )
