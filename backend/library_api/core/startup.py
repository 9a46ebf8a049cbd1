from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..db.database import AsyncSessionLocal, engine, init_db
from ..db.seed import seed_library
from .config import settings
from .logging import get_logger
from .metrics import set_app_info

logger = get_logger(__name__)


def create_lifespan():
    """Create lifespan context manager for FastAPI application.

    Handles:
    - Startup: app info metric, database schema, sample data
    - Shutdown: dispose of the database engine

    Returns:
        Lifespan context manager for FastAPI
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Application starting",
            extra={
                'environment': settings.ENVIRONMENT,
                'version': settings.APP_VERSION
            }
        )

        set_app_info(
            version=settings.APP_VERSION,
            environment=settings.ENVIRONMENT
        )
        logger.debug("Prometheus metrics initialized")

        await init_db()
        if settings.SEED_DATA:
            async with AsyncSessionLocal() as session:
                await seed_library(session)

        yield

        logger.info("Application shutting down")
        await engine.dispose()

    return lifespan
