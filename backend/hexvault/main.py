"""HexVault API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map VaultError → 400 text/plain responses
    - CORS configured from settings (not hardcoded)
    - Logging and database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Service logger stored on app.state and injected into repositories per request
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hexvault.api.error_handlers import register_error_handlers
from hexvault.api.routes import health, vault
from hexvault.config import get_settings
from hexvault.infrastructure.database import init_db
from hexvault.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    app.state.vault_logger = setup_logging(
        settings.log_level, settings.log_format, settings.log_file or None,
    )
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.create_tables_on_startup:
        await manager.create_tables()
    logger.info("HexVault API started")
    yield
    await manager.dispose()
    logger.info("HexVault API shutting down")


app = FastAPI(title="HexVault API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(vault.router)

register_error_handlers(app)
