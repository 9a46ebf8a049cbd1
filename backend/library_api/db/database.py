"""Database Configuration.

Async SQLAlchemy setup. PostgreSQL (asyncpg) in production; any async
driver URL works, which is how the tests run against SQLite (aiosqlite).
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from ..core.config import settings
from ..core.logging import get_logger

logger = get_logger(__name__)

POOL_SIZE = 10
MAX_OVERFLOW = 20


def build_database_url(url: str) -> str:
    """Use the asyncpg driver for plain PostgreSQL URLs."""
    return url.replace('postgresql://', 'postgresql+asyncpg://', 1)


def create_engine_from_url(url: str) -> AsyncEngine:
    """Create the async engine; pool sizing only applies to server databases."""
    database_url = build_database_url(url)
    engine_kwargs = {'echo': settings.DEBUG, 'pool_pre_ping': True}
    if not database_url.startswith('sqlite'):
        engine_kwargs.update(pool_size=POOL_SIZE, max_overflow=MAX_OVERFLOW)
    return create_async_engine(database_url, **engine_kwargs)


engine = create_engine_from_url(settings.DATABASE_URL)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False
)

Base = declarative_base()


async def get_db() -> AsyncSession:
    """Request-scoped session; endpoints decide when to commit."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create all tables that do not exist yet."""
    from .. import models  # noqa: F401  (registers the tables on Base.metadata)

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured")
