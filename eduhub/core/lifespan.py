"""Application lifespan: startup and shutdown.

Only infrastructure wiring here: logging, the audit-flag cache and the
SQL engine dispose on shutdown.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from eduhub.core.config import get_settings
from eduhub.infrastructure.cache import InMemoryCache
from eduhub.infrastructure.persistence import database
from eduhub.shared.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the SQL engine."""
    settings = get_settings()
    setup_logging()

    app.state.audit_cache = InMemoryCache()
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    if not settings.database_configured:
        logger.warning("DATABASE_URL is not set; database-backed endpoints will return 503")
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    await app.state.audit_cache.clear()
    await database.dispose_engine()
    logger.info("Database engine disposed")
