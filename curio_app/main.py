"""Curio — FastAPI application entry point."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from curio_app.admin.setup import setup_admin
from curio_app.api.admin import router as admin_router
from curio_app.api.auth import router as auth_router
from curio_app.api.content import router as content_router
from curio_app.api.deps import build_services, utc_timestamp
from curio_app.api.favorites import router as favorites_router
from curio_app.api.user import router as user_router
from curio_app.config import AppConfig
from curio_app.db.connection import init_db
from curio_app.errors import CurioError
from curio_app.providers.art import ArtFetcher
from curio_app.providers.quotes import QuoteFetcher
from curio_app.tasks.scheduler import Scheduler
from curio_app.tasks.workers import WorkerPool

logger = logging.getLogger(__name__)

# Global references for background tasks
_worker_pool: WorkerPool | None = None
_bg_tasks: list[asyncio.Task] = []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    global _worker_pool, _bg_tasks

    config = app.state.config
    services = app.state.services

    _worker_pool = WorkerPool(
        app.state.db,
        services.art_cache,
        services.quote_cache,
        services.daily,
        config,
    )
    _bg_tasks.append(asyncio.create_task(_worker_pool.start()))

    if config.scheduler.enabled:
        app.state.scheduler = Scheduler(services.daily, config)
        _bg_tasks.append(asyncio.create_task(app.state.scheduler.start()))

    logger.info("Worker pool and scheduler started")

    yield

    # Shutdown
    if _worker_pool:
        _worker_pool.stop()
    if app.state.scheduler:
        app.state.scheduler.stop()
    for task in _bg_tasks:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
    _bg_tasks.clear()
    logger.info("Application shutdown complete")


def _init_sentry(dsn: str, environment: str) -> None:
    """Initialize Sentry SDK if a DSN is configured and not in development."""
    if not dsn or environment == "development":
        return
    sentry_sdk.init(
        dsn,
        environment=environment,
        send_default_pii=False,
        traces_sample_rate=0,
        send_client_reports=False,
        auto_session_tracking=False,
    )


def _error_response(request: Request, status_code: int, message: str, **extra) -> JSONResponse:
    body = {
        "success": False,
        "error": True,
        "message": message,
        "path": request.url.path,
        "timestamp": utc_timestamp(),
    }
    body.update(extra)
    return JSONResponse(body, status_code=status_code)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CurioError)
    async def curio_error(request: Request, exc: CurioError):
        return _error_response(request, exc.status_code, exc.message, **exc.extra)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return _error_response(request, exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        return _error_response(request, 400, first.get("msg", "Invalid request"))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
        return _error_response(request, 500, "Internal server error")


def create_app(
    config: AppConfig | None = None,
    *,
    art_fetcher: ArtFetcher | None = None,
    quote_fetcher: QuoteFetcher | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if config is None:
        config = AppConfig.from_yaml()

    _init_sentry(config.sentry_dsn, config.environment)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, config.server.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    is_dev = config.environment == "development"

    app = FastAPI(
        title="Curio",
        version="1.0.0",
        description="Daily artwork and quote",
        lifespan=lifespan,
        debug=is_dev,
    )

    # Initialize database
    db = init_db(config)
    app.state.config = config
    app.state.db = db
    app.state.services = build_services(config, db, art_fetcher, quote_fetcher)
    app.state.scheduler = None

    # Admin surfaces are only mounted behind Basic Auth
    admin_enabled = bool(config.server.admin_user and config.server.admin_password)
    if admin_enabled:
        from curio_app.middleware import BasicAuthMiddleware

        app.add_middleware(
            BasicAuthMiddleware,
            username=config.server.admin_user,
            password=config.server.admin_password,
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    _register_error_handlers(app)

    # Register routes
    app.include_router(content_router)
    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(favorites_router)
    if admin_enabled:
        app.include_router(admin_router)
        setup_admin(app, str(config.database.sqlite_path), debug=is_dev)
    else:
        logger.warning("Admin credentials not configured; admin API and console are disabled")

    @app.get("/")
    @app.get("/health")
    async def health(request: Request):
        scheduler = request.app.state.scheduler
        return {
            "status": "ok",
            "timestamp": utc_timestamp(),
            "environment": config.environment,
            "scheduler": bool(scheduler and scheduler.is_running),
        }

    return app


def cli_entry() -> None:
    """CLI entry point for running the server."""
    import uvicorn

    config = AppConfig.from_yaml()
    app = create_app(config)

    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.server.log_level,
        proxy_headers=True,
        forwarded_allow_ips=config.server.forwarded_allow_ips,
    )


# Default app instance for uvicorn
app = create_app()
