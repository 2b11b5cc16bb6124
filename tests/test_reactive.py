"""
Tests for the streaming task service.
"""

from __future__ import annotations

import uuid
from unittest.mock import AsyncMock, patch

import pytest

from app.core.errors import TaskNotFoundError, ValidationError
from app.services.reactive import ReactiveTaskService
from taskdesk_shared.schemas.common import TaskPriority, TaskStatus


@pytest.fixture
def reactive():
    return ReactiveTaskService(delay_seconds=0)


class TestReactiveService:
    @pytest.mark.asyncio
    async def test_create_and_get(self, reactive):
        task = await reactive.create_task("Stream me", "")
        assert await reactive.get_task(task.id) == task
        assert await reactive.get_task(uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_create_validates(self, reactive):
        with pytest.raises(ValidationError):
            await reactive.create_task("", "x")

    @pytest.mark.asyncio
    async def test_stream_yields_every_task_in_order(self, reactive):
        created = [await reactive.create_task(f"t{i}", "") for i in range(3)]
        streamed = [t async for t in reactive.stream_tasks()]
        assert streamed == created

    @pytest.mark.asyncio
    async def test_stream_sleeps_before_each_item(self):
        service = ReactiveTaskService(delay_seconds=1.5)
        await service.create_task("a", "")
        await service.create_task("b", "")

        with patch("app.services.reactive.asyncio.sleep", new=AsyncMock()) as sleep:
            items = [t async for t in service.stream_tasks()]

        assert len(items) == 2
        assert sleep.await_count == 2
        sleep.assert_awaited_with(1.5)

    @pytest.mark.asyncio
    async def test_update_status(self, reactive):
        task = await reactive.create_task("a", "")
        updated = await reactive.update_status(task.id, TaskStatus.BLOCKED)
        assert updated.priority is TaskPriority.HIGH
        assert (await reactive.get_task(task.id)).status == TaskStatus.BLOCKED

    @pytest.mark.asyncio
    async def test_update_missing(self, reactive):
        with pytest.raises(TaskNotFoundError):
            await reactive.update_status(uuid.uuid4(), TaskStatus.COMPLETED)

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, reactive):
        task = await reactive.create_task("a", "")
        await reactive.delete_task(task.id)
        await reactive.delete_task(task.id)
        assert await reactive.get_task(task.id) is None
