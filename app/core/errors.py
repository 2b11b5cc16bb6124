"""
Domain error taxonomy.

Services raise these; the API layer maps them to HTTP responses.
"""

from __future__ import annotations

import uuid

from taskdesk_shared.schemas.common import TaskStatus


class TaskServiceError(Exception):
    """Base class for expected, caller-recoverable task conditions."""


class ValidationError(TaskServiceError):
    """Invalid input to a creation or query call."""


class TaskNotFoundError(TaskServiceError):
    def __init__(self, task_id: uuid.UUID):
        self.task_id = task_id
        super().__init__(f"Task not found with ID: {task_id}")


class StatusTransitionUnavailable(TaskServiceError):
    """A business rule refused the requested status change."""

    def __init__(self, task_id: uuid.UUID, current: TaskStatus, requested: TaskStatus):
        self.task_id = task_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot transition task {task_id} from '{current.value}' to '{requested.value}'"
        )
