"""Application lifespan: startup and shutdown.

Single place for startup/shutdown logic. No business logic here, only
wiring of infrastructure (DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from offering_docs.infrastructure.persistence import database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup, yield, then dispose the SQL engine on shutdown."""
    config = app.state.storage_config
    logger.info(
        "Offering documents service starting (bucket=%s, prefix=%r, max=%d bytes)",
        config.bucket,
        config.prefix,
        config.max_file_size,
    )

    yield

    if database.engine is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
