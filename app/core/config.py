"""
Application configuration loaded from environment variables.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Taskdesk server configuration."""

    model_config = SettingsConfigDict(env_prefix="TASKDESK_", env_file=".env", extra="ignore")

    # Storage
    store_backend: Literal["memory", "database"] = "memory"
    database_url: str = "sqlite+aiosqlite:///./taskdesk.db"

    # Events
    event_sink: Literal["log", "redis", "none"] = "log"
    redis_url: str = "redis://localhost:6379/0"
    events_channel: str = "taskdesk:events"

    # Business rules
    block_transitions_from_blocked: bool = False

    # Reactive listing
    reactive_delay_seconds: float = 1.0

    # Logging
    log_level: str = "info"
    log_format: Literal["json", "text"] = "json"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
