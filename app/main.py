"""
Taskdesk API Server

Entry point for the FastAPI application.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from app.api.v1 import router as api_v1_router
from app.core.config import Settings, get_settings
from app.core.database import create_engine, create_session_factory, init_db
from app.core.errors import StatusTransitionUnavailable, TaskNotFoundError, ValidationError
from app.core.events import build_event_sink
from app.core.logging import configure_logging
from app.core.middleware import RequestLoggingMiddleware
from app.core.redis import close_redis
from app.repositories.memory import InMemoryTaskStore
from app.services.reactive import ReactiveTaskService

log = structlog.get_logger()


def _error(status: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"error": {"code": code, "message": message, "status": status}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _error(400, "VALIDATION_FAILED", str(exc))

    @app.exception_handler(TaskNotFoundError)
    async def not_found_handler(request: Request, exc: TaskNotFoundError):
        return _error(404, "TASK_NOT_FOUND", str(exc))

    @app.exception_handler(StatusTransitionUnavailable)
    async def transition_unavailable_handler(request: Request, exc: StatusTransitionUnavailable):
        # Reported as "no content", not as an error page
        log.info("task.transition_unavailable", task_id=str(exc.task_id), status=exc.current.value)
        return Response(status_code=204)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("Taskdesk starting", store=settings.store_backend, events=settings.event_sink)
        if settings.store_backend == "database":
            await init_db(app.state.db_engine)
        yield
        log.info("Taskdesk shutting down")
        if settings.store_backend == "database":
            await app.state.db_engine.dispose()
        if settings.event_sink == "redis":
            await close_redis()

    app = FastAPI(
        title="Taskdesk",
        description="Task management service with status-derived priorities.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.task_store = InMemoryTaskStore()
    if settings.store_backend == "database":
        app.state.db_engine = create_engine(settings)
        app.state.session_factory = create_session_factory(app.state.db_engine)
    app.state.event_sink = build_event_sink(settings.event_sink, settings.events_channel, settings.redis_url)
    app.state.reactive_service = ReactiveTaskService(delay_seconds=settings.reactive_delay_seconds)

    # Middleware (order matters: the last one added is outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for liveness probes."""
        return {"status": "ok"}

    @app.get("/ready", tags=["System"])
    async def readiness_check():
        """Readiness check endpoint for startup probes."""
        return {"status": "ready", "store": settings.store_backend}

    return app


app = create_app()


def run() -> None:
    """CLI entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())
