"""
Shared fixtures: in-memory store, collecting event sink, service and API client.
"""

import pytest
import structlog
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.core.events import InMemoryEventSink
from app.main import create_app
from app.repositories.memory import InMemoryTaskStore
from app.services.tasks import TaskService


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def store():
    return InMemoryTaskStore()


@pytest.fixture
def sink():
    return InMemoryEventSink()


@pytest.fixture
def service(store, sink):
    return TaskService(store, sink)


@pytest.fixture
def settings():
    return Settings(
        store_backend="memory",
        event_sink="none",
        reactive_delay_seconds=0,
        log_format="text",
        log_level="warning",
    )


@pytest.fixture
def app(settings, sink):
    application = create_app(settings)
    application.state.event_sink = sink
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
