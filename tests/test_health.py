"""
Health check endpoint tests.
"""

from unittest.mock import patch

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Health endpoint should return status ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_ready_check(client: AsyncClient):
    """Ready endpoint should report the configured store."""
    response = await client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "store": "memory"}


@pytest.mark.asyncio
async def test_api_root(client: AsyncClient):
    """API v1 root should return version and endpoint list."""
    response = await client.get("/api/v1/")
    assert response.status_code == 200
    data = response.json()
    assert data["api"] == "v1"
    assert "/tasks" in data["endpoints"]


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


def test_module_app_builds_with_default_settings():
    import app.main

    assert app.main.app.state.settings.store_backend in ("memory", "database")


def test_upper_case_log_level_is_accepted():
    from app.core.logging import configure_logging

    configure_logging("INFO", "text")
    configure_logging("warning", "json")


def test_run_passes_lower_case_level_to_uvicorn():
    from app.core.config import Settings
    from app.main import run

    with patch("app.main.get_settings", return_value=Settings(log_level="INFO", _env_file=None)), \
            patch("uvicorn.run") as uvicorn_run:
        run()

    assert uvicorn_run.call_args.kwargs["log_level"] == "info"
