"""Food Journal — FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI

from foodjournal.api.journals import router as journals_router
from foodjournal.config import AppConfig
from foodjournal.db.connection import init_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    logger.info("Food Journal started (store: %s)", app.state.store.path)

    yield

    app.state.store.close()
    logger.info("Application shutdown complete")


def _init_sentry(dsn: str, environment: str) -> None:
    """Initialize Sentry SDK if a DSN is configured and not in development."""
    if not dsn or environment == "development":
        return
    sentry_sdk.init(
        dsn,
        environment=environment,
        traces_sample_rate=0,
        send_client_reports=False,
        auto_session_tracking=False,
    )


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if config is None:
        config = AppConfig.from_yaml()

    _init_sentry(config.sentry_dsn, config.environment)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, config.server.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Food Journal",
        version="1.0.0",
        description="Photo food journal backed by a local SQLite store",
        lifespan=lifespan,
        debug=config.environment == "development",
    )

    # The store is owned here and shared with every route
    app.state.config = config
    app.state.store = init_store(config)

    app.include_router(journals_router)

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
    )
