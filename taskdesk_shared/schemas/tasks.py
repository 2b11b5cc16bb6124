"""Task-related Pydantic schemas for shared use across server and clients."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic import UUID4

from .common import TaskPriority, TaskStatus


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class TaskCreate(BaseModel):
    """Request body for POST /tasks.

    Both fields are optional at the schema level so that blank or missing
    values reach the domain factory and fail with a ValidationError there.
    """
    title: Optional[str] = None
    description: Optional[str] = None


class TaskStatusUpdate(BaseModel):
    """Request body for PATCH /tasks/{taskId}/status."""
    status: TaskStatus


class TaskDuration(BaseModel):
    """A single entry for POST /tasks/analyze-durations."""
    id: UUID4
    duration: timedelta


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class PriorityRead(BaseModel):
    value: int
    label: str
    type: str

    @classmethod
    def from_priority(cls, priority: TaskPriority) -> "PriorityRead":
        return cls(value=priority.level, label=priority.label, type=priority.name)


class TaskRead(BaseModel):
    id: UUID4
    title: str
    description: str
    status: TaskStatus
    priority: PriorityRead
    created_at: datetime
    updated_at: datetime


class TaskStatistics(BaseModel):
    total: int
    pending: int
    in_progress: int
    blocked: int
    completed: int


class StatusBreakdown(BaseModel):
    status: TaskStatus
    count: int
    oldest_task: datetime
    newest_task: datetime


class TaskStatusStatistics(BaseModel):
    total_tasks: int
    status_breakdown: List[StatusBreakdown] = Field(default_factory=list)
