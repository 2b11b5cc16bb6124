"""
Task domain events and the sinks they are published to.

Features:
- Typed events for task creation and completion
- Sinks: structured log, in-memory collector, Redis Pub/Sub, fan-out
- Publishing happens after the store write commits; a failing sink never undoes it
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Literal, Optional, Protocol, Union

import structlog
from pydantic import BaseModel, Field

from app.core.redis import get_redis
from app.domain.task import Task

log = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskCreated(BaseModel):
    event_type: Literal["task.created"] = "task.created"
    task_id: uuid.UUID
    title: str
    status: str
    occurred_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_task(cls, task: Task) -> "TaskCreated":
        return cls(task_id=task.id, title=task.title, status=task.status.value)


class TaskCompleted(BaseModel):
    event_type: Literal["task.completed"] = "task.completed"
    task_id: uuid.UUID
    title: str
    occurred_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_task(cls, task: Task) -> "TaskCompleted":
        return cls(task_id=task.id, title=task.title)


TaskEvent = Union[TaskCreated, TaskCompleted]


class EventSink(Protocol):
    async def publish(self, event: TaskEvent) -> None: ...


class NullEventSink:
    async def publish(self, event: TaskEvent) -> None:
        return None


class LoggingEventSink:
    """Write every event as a structured log line."""

    async def publish(self, event: TaskEvent) -> None:
        log.info(event.event_type, **event.model_dump(mode="json", exclude={"event_type"}))


class InMemoryEventSink:
    """Collect events in order. Useful when embedding the service and in tests."""

    def __init__(self) -> None:
        self.events: list[TaskEvent] = []

    async def publish(self, event: TaskEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: str) -> list[TaskEvent]:
        return [e for e in self.events if e.event_type == event_type]


class RedisEventSink:
    """Publish events as JSON on a Redis Pub/Sub channel."""

    def __init__(self, channel: str, redis: Any = None, url: Optional[str] = None):
        self.channel = channel
        self.url = url
        self._redis = redis

    async def publish(self, event: TaskEvent) -> None:
        redis = self._redis or await get_redis(self.url)
        await redis.publish(self.channel, event.model_dump_json())


class FanoutEventSink:
    """Deliver each event to several sinks, isolating their failures."""

    def __init__(self, *sinks: EventSink):
        self.sinks = list(sinks)

    async def publish(self, event: TaskEvent) -> None:
        for sink in self.sinks:
            try:
                await sink.publish(event)
            except Exception:
                log.exception(
                    "event.publish_failed",
                    sink=type(sink).__name__,
                    event_type=event.event_type,
                )


def build_event_sink(kind: str, channel: str, redis_url: Optional[str] = None) -> EventSink:
    if kind == "redis":
        return FanoutEventSink(LoggingEventSink(), RedisEventSink(channel, url=redis_url))
    if kind == "log":
        return LoggingEventSink()
    return NullEventSink()
