"""
Tests for task events and event sinks.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest

from app.core.events import (
    FanoutEventSink,
    InMemoryEventSink,
    LoggingEventSink,
    NullEventSink,
    RedisEventSink,
    TaskCompleted,
    TaskCreated,
    build_event_sink,
)
from app.domain.task import Task


class TestEventModels:
    def test_created_from_task(self):
        task = Task.create("Evented", "")
        event = TaskCreated.from_task(task)
        assert event.event_type == "task.created"
        assert event.task_id == task.id
        assert event.title == "Evented"
        assert event.status == "PENDING"

    def test_completed_json(self):
        task = Task.create("Done", "")
        payload = json.loads(TaskCompleted.from_task(task).model_dump_json())
        assert payload["event_type"] == "task.completed"
        assert payload["task_id"] == str(task.id)
        assert "occurred_at" in payload


class TestSinks:
    @pytest.mark.asyncio
    async def test_in_memory_collects_in_order(self):
        sink = InMemoryEventSink()
        task = Task.create("A", "")
        await sink.publish(TaskCreated.from_task(task))
        await sink.publish(TaskCompleted.from_task(task))
        assert [e.event_type for e in sink.events] == ["task.created", "task.completed"]
        assert len(sink.of_type("task.completed")) == 1

    @pytest.mark.asyncio
    async def test_redis_sink_publishes_json(self):
        redis_mock = AsyncMock()
        sink = RedisEventSink("taskdesk:events", redis=redis_mock)
        task = Task.create("A", "")

        await sink.publish(TaskCreated.from_task(task))

        redis_mock.publish.assert_awaited_once()
        channel, body = redis_mock.publish.await_args.args
        assert channel == "taskdesk:events"
        assert json.loads(body)["task_id"] == str(task.id)

    @pytest.mark.asyncio
    async def test_redis_sink_uses_shared_connection_by_default(self):
        redis_mock = AsyncMock()
        with patch("app.core.events.get_redis", AsyncMock(return_value=redis_mock)):
            await RedisEventSink("chan").publish(TaskCreated.from_task(Task.create("A", "")))
        redis_mock.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_fanout_isolates_failures(self):
        broken = AsyncMock()
        broken.publish.side_effect = ConnectionError("redis down")
        collector = InMemoryEventSink()

        await FanoutEventSink(broken, collector).publish(TaskCreated.from_task(Task.create("A", "")))

        assert len(collector.events) == 1

    @pytest.mark.asyncio
    async def test_logging_and_null_sinks_accept_events(self):
        event = TaskCreated.from_task(Task.create("A", ""))
        await LoggingEventSink().publish(event)
        await NullEventSink().publish(event)


class TestBuildEventSink:
    def test_kinds(self):
        assert isinstance(build_event_sink("log", "c"), LoggingEventSink)
        assert isinstance(build_event_sink("none", "c"), NullEventSink)
        sink = build_event_sink("redis", "c")
        assert isinstance(sink, FanoutEventSink)
        assert any(isinstance(s, RedisEventSink) for s in sink.sinks)

    def test_redis_sink_keeps_configured_url(self):
        sink = build_event_sink("redis", "c", "redis://events-host:6380/2")
        [redis_sink] = [s for s in sink.sinks if isinstance(s, RedisEventSink)]
        assert redis_sink.url == "redis://events-host:6380/2"
