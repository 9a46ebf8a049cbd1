"""Library Repository.

Data access layer for authors and books.
Separates data access logic from business logic (Repository Pattern).

Collection queries receive already-validated parameters and sort clauses;
they filter, sort and slice in the database and report the unsliced total.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConfigurationError
from ..models import Author, Book
from ..shaping import AuthorsResourceParameters, SortClause, page_offset

AUTHOR_SORT_COLUMNS = {
    "id": Author.id,
    "first_name": Author.first_name,
    "last_name": Author.last_name,
    "date_of_birth": Author.date_of_birth,
    "genre": Author.genre,
}

BOOK_SORT_COLUMNS = {
    "id": Book.id,
    "title": Book.title,
    "description": Book.description,
}

LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    """Make `%` and `_` in a search term match literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def _order_by(columns: dict, sort_clauses: Iterable[SortClause]) -> list:
    """Translate sort clauses into ORDER BY expressions.

    Raises:
        ConfigurationError: If a clause targets a column this repository cannot sort by
    """
    expressions = []
    for clause in sort_clauses:
        column = columns.get(clause.source_property)
        if column is None:
            raise ConfigurationError(
                f"Property mapping targets '{clause.source_property}', "
                f"which is not a sortable column"
            )
        expressions.append(column.desc() if clause.descending else column.asc())
    return expressions


class LibraryRepository:
    """Repository for Author and Book data access operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_authors(
        self,
        params: AuthorsResourceParameters,
        sort_clauses: Sequence[SortClause] = ()
    ) -> tuple[list[Author], int]:
        """List authors matching the parameters, one page at a time.

        Args:
            params: Filters and paging (already validated)
            sort_clauses: Expanded sort clauses from the authors property mapping

        Returns:
            Tuple of (authors on the requested page, total matching authors)
        """
        query = select(Author)

        if params.genre and params.genre.strip():
            query = query.where(func.lower(Author.genre) == params.genre.strip().lower())

        if params.search_query and params.search_query.strip():
            pattern = f"%{_escape_like(params.search_query.strip())}%"
            query = query.where(
                or_(
                    Author.genre.ilike(pattern, escape=LIKE_ESCAPE),
                    Author.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                    Author.last_name.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        # Author.id last keeps page boundaries stable between equal sort keys
        query = query.order_by(*_order_by(AUTHOR_SORT_COLUMNS, sort_clauses), Author.id)
        query = query.offset(page_offset(params.page_size, params.page_number)).limit(params.page_size)

        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def get_author(self, author_id: UUID) -> Author | None:
        """Find author by ID."""
        return await self.db.get(Author, author_id)

    async def get_authors_by_ids(self, author_ids: Iterable[UUID]) -> list[Author]:
        """Find the authors with the given IDs, ordered by name.

        Missing IDs are simply absent from the result.
        """
        query = (
            select(Author)
            .where(Author.id.in_(list(author_ids)))
            .order_by(Author.first_name, Author.last_name)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def author_exists(self, author_id: UUID) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(Author).where(Author.id == author_id)
        )
        return (result.scalar() or 0) > 0

    async def add_author(self, author: Author) -> Author:
        """Add an author (and any books attached to it)."""
        self.db.add(author)
        await self.db.flush()
        return author

    async def add_authors(self, authors: Iterable[Author]) -> list[Author]:
        authors = list(authors)
        self.db.add_all(authors)
        await self.db.flush()
        return authors

    async def delete_author(self, author: Author) -> None:
        """Delete an author together with its books."""
        await self.db.delete(author)
        await self.db.flush()

    async def get_books_for_author(
        self,
        author_id: UUID,
        sort_clauses: Sequence[SortClause] = ()
    ) -> list[Book]:
        query = (
            select(Book)
            .where(Book.author_id == author_id)
            .order_by(*_order_by(BOOK_SORT_COLUMNS, sort_clauses), Book.id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_book_for_author(self, author_id: UUID, book_id: UUID) -> Book | None:
        result = await self.db.execute(
            select(Book).where(and_(Book.author_id == author_id, Book.id == book_id))
        )
        return result.scalar_one_or_none()

    async def book_exists(self, book_id: UUID) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(Book).where(Book.id == book_id)
        )
        return (result.scalar() or 0) > 0

    async def add_book_for_author(self, author_id: UUID, book: Book) -> Book:
        book.author_id = author_id
        self.db.add(book)
        await self.db.flush()
        return book

    async def update_book(self, book: Book) -> Book:
        await self.db.flush()
        return book

    async def delete_book(self, book: Book) -> None:
        await self.db.delete(book)
        await self.db.flush()
