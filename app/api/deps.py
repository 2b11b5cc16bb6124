"""
FastAPI dependencies wiring the task services to the configured store.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Depends, Request

from app.core.config import Settings
from app.core.database import session_scope
from app.repositories.base import TaskStore
from app.repositories.sql import SqlTaskStore
from app.services.reactive import ReactiveTaskService
from app.services.tasks import TaskService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_task_store(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[TaskStore, None]:
    """In-memory store shared by the app, or a session-scoped SQL store."""
    if settings.store_backend == "database":
        async with session_scope(request.app.state.session_factory) as session:
            yield SqlTaskStore(session)
    else:
        yield request.app.state.task_store


def get_task_service(
    request: Request,
    store: TaskStore = Depends(get_task_store),
    settings: Settings = Depends(get_app_settings),
) -> TaskService:
    return TaskService(
        store,
        request.app.state.event_sink,
        block_transitions_from_blocked=settings.block_transitions_from_blocked,
    )


def get_reactive_service(request: Request) -> ReactiveTaskService:
    return request.app.state.reactive_service
