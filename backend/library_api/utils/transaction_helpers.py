"""Transaction Helper Utilities.

Provides safe transaction management with automatic rollback on errors.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import LibraryApiError
from ..core.logging import get_logger

logger = get_logger(__name__)


def _is_client_error(error: Exception) -> bool:
    if isinstance(error, LibraryApiError):
        return error.http_status < 500
    if isinstance(error, HTTPException):
        return error.status_code < 500
    return False


@asynccontextmanager
async def safe_transaction(
    db: AsyncSession
) -> AsyncGenerator[AsyncSession, None]:
    """Commit the session when the block succeeds, roll it back otherwise.

    Client errors (4xx) are logged at info level; anything else is logged
    with its traceback. The original exception is always re-raised.

    Usage:
        async with safe_transaction(db):
            author = await service.create_author(author_data)
    """
    try:
        yield db
        await db.commit()
        logger.debug("Transaction committed successfully")
    except Exception as e:
        await db.rollback()
        log = logger.info if _is_client_error(e) else logger.error
        log(
            "Transaction rolled back",
            extra={
                'error': str(e),
                'error_type': type(e).__name__
            },
            exc_info=not _is_client_error(e)
        )
        raise
