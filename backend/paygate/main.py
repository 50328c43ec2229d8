"""Paygate API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PaygateError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, HTTP clients and the idempotency recorder are created on startup
      via the lifespan context manager and released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Collaborators on app.state, reached through api/deps.py: no import-time singletons
      beyond the database manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import paygate.infrastructure.database as db_module
from paygate.api.error_handlers import register_error_handlers
from paygate.api.routes import events, health, transfers
from paygate.config import get_settings
from paygate.infrastructure.ach_client import AchClient
from paygate.infrastructure.database import init_db
from paygate.infrastructure.idempotency import IdempotencyRecorder
from paygate.infrastructure.ledger_client import LedgerClient
from paygate.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.idempotency = IdempotencyRecorder(settings.idempotency_ttl_seconds)
    app.state.ach_client = AchClient(
        settings.ach_endpoint,
        timeout_seconds=settings.ach_timeout_seconds,
        max_retries=settings.ach_max_retries,
        base_delay_ms=settings.ach_base_delay_ms,
        max_delay_ms=settings.ach_max_delay_ms,
    )
    app.state.ledger_client = None
    if settings.ledger_enabled:
        app.state.ledger_client = LedgerClient(
            settings.ledger_endpoint,
            auth_token=settings.ledger_auth_token,
            timeout_seconds=settings.ledger_timeout_seconds,
        )
    logger.info("Paygate API started")
    yield
    logger.info("Paygate API shutting down")
    await app.state.ach_client.close()
    if app.state.ledger_client is not None:
        await app.state.ledger_client.close()
    if db_module.db_manager is not None:
        await db_module.db_manager.dispose()


app = FastAPI(
    title="Paygate API", version="0.1.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(transfers.router)
app.include_router(events.router)

register_error_handlers(app)
