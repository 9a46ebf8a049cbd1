"""Tests for transaction helper utilities."""

from datetime import date

import pytest
from sqlalchemy import select

from library_api.core.exceptions import ResourceNotFoundError
from library_api.models import Author
from library_api.utils.transaction_helpers import safe_transaction


def new_author(first_name: str = "Test") -> Author:
    return Author(
        first_name=first_name,
        last_name="Author",
        date_of_birth=date(1970, 1, 1),
        genre="Drama"
    )


@pytest.mark.asyncio()
async def test_safe_transaction_commits_on_success(test_db):
    """Test that safe_transaction commits on success."""
    async with test_db() as db:
        async with safe_transaction(db):
            author = new_author()
            db.add(author)

    async with test_db() as db:
        persisted = (await db.execute(select(Author).where(Author.id == author.id))).scalar_one_or_none()
        assert persisted is not None


@pytest.mark.asyncio()
async def test_safe_transaction_rolls_back_on_error(test_db):
    """Test that safe_transaction rolls back on exception."""
    async with test_db() as db:
        with pytest.raises(ValueError, match="Test error"):
            async with safe_transaction(db):
                db.add(new_author("Rolled back"))
                await db.flush()
                raise ValueError("Test error")

        result = await db.execute(select(Author).where(Author.first_name == "Rolled back"))
        assert result.scalar_one_or_none() is None


@pytest.mark.asyncio()
async def test_safe_transaction_reraises_client_errors(test_db):
    """Test domain errors propagate unchanged after the rollback."""
    async with test_db() as db:
        with pytest.raises(ResourceNotFoundError):
            async with safe_transaction(db):
                db.add(new_author("Missing"))
                raise ResourceNotFoundError("Author not found")

        result = await db.execute(select(Author).where(Author.first_name == "Missing"))
        assert result.scalar_one_or_none() is None
