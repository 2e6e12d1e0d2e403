from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .db.schema import init_db
from .core import errors
from .routers import health, entries, form, summary, rates, preferences
from .services.rates.cache_service import RateRefresher
from .services.tracker import build_tracker


def create_app(settings_override: Settings | None = None) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB). Falls back to cached get_settings().
    """
    settings = settings_override or get_settings()
    if settings_override is not None:
        settings.init_post_load()
    # Initialize logging early
    init_logging(debug=settings.debug)

    # Ensure storage schema (idempotent) so test-injected fresh DBs have tables
    try:
        init_db(settings.db_path)  # type: ignore[arg-type]
    except Exception:
        # Failing to init storage is fatal; re-raise after logging
        logging.getLogger("budget_tracker").exception("failed to initialise storage on startup")
        raise

    tracker = build_tracker(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        refresher = None
        if settings.rates_refresh_enabled:
            refresher = RateRefresher(tracker.rate_cache, settings.rates_refresh_seconds)
            refresher.start()
        app.state.rate_refresher = refresher
        try:
            yield
        finally:
            if refresher is not None:
                await refresher.stop()

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.tracker = tracker

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(entries.router)
    app.include_router(form.router)
    app.include_router(summary.router)
    app.include_router(rates.router)
    app.include_router(preferences.router)

    @app.get("/")
    async def root():
        return {"message": "Budget Tracker API", "version": settings.version}

    return app
