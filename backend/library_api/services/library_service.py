"""Library Service Layer.

Handles the author and book use cases on top of the repository.
Raises domain errors (not found, conflict) instead of returning sentinels, so
endpoints stay thin.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import ErrorMessages
from ..core.exceptions import ResourceConflictError, ResourceNotFoundError
from ..core.logging import get_logger
from ..domain.transformers import MapperRegistry, apply_book_update
from ..models import Author, Book
from ..repositories import LibraryRepository
from ..schemas import AuthorForCreationDto, BookForCreationDto, BookForUpdateDto
from ..shaping import AuthorsResourceParameters, SortClause

logger = get_logger(__name__)


class LibraryService:
    """Service for managing authors and their books."""

    def __init__(
        self,
        db: AsyncSession,
        mappers: MapperRegistry,
        repository: LibraryRepository | None = None
    ):
        self.db = db
        self.mappers = mappers
        self.repository = repository or LibraryRepository(db)

    # ------------------------------------------------------------------
    # Authors
    # ------------------------------------------------------------------

    async def list_authors(
        self,
        params: AuthorsResourceParameters,
        sort_clauses: Sequence[SortClause]
    ) -> tuple[list[Author], int]:
        """Page of authors plus the total count matching the filters."""
        return await self.repository.get_authors(params, sort_clauses)

    async def get_author(self, author_id: UUID) -> Author:
        """Get an author.

        Raises:
            ResourceNotFoundError: If the author does not exist
        """
        author = await self.repository.get_author(author_id)
        if author is None:
            raise ResourceNotFoundError(ErrorMessages.AUTHOR_NOT_FOUND.format(author_id=author_id))
        return author

    async def ensure_author_exists(self, author_id: UUID) -> None:
        if not await self.repository.author_exists(author_id):
            raise ResourceNotFoundError(ErrorMessages.AUTHOR_NOT_FOUND.format(author_id=author_id))

    async def create_author(self, author_data: AuthorForCreationDto) -> Author:
        author = self.mappers.map(author_data, Author)
        await self.repository.add_author(author)
        logger.info(
            "Author created",
            extra={'author_id': str(author.id), 'books': len(author_data.books)}
        )
        return author

    async def block_author_creation(self, author_id: UUID) -> None:
        """POST to an existing author's URI is a conflict; to an unknown one, not found.

        Raises:
            ResourceConflictError: If the author exists
            ResourceNotFoundError: Otherwise
        """
        if await self.repository.author_exists(author_id):
            raise ResourceConflictError(ErrorMessages.AUTHOR_ALREADY_EXISTS.format(author_id=author_id))
        raise ResourceNotFoundError(ErrorMessages.AUTHOR_NOT_FOUND.format(author_id=author_id))

    async def delete_author(self, author_id: UUID) -> None:
        author = await self.get_author(author_id)
        await self.repository.delete_author(author)
        logger.info("Author deleted", extra={'author_id': str(author_id)})

    # ------------------------------------------------------------------
    # Author collections
    # ------------------------------------------------------------------

    async def get_author_collection(self, author_ids: Sequence[UUID]) -> list[Author]:
        """Get every author in `author_ids`.

        Raises:
            ResourceNotFoundError: If any of the authors does not exist
        """
        unique_ids = list(dict.fromkeys(author_ids))
        authors = await self.repository.get_authors_by_ids(unique_ids)
        if len(authors) != len(unique_ids):
            raise ResourceNotFoundError(
                ErrorMessages.AUTHOR_COLLECTION_INCOMPLETE.format(
                    ids=",".join(str(author_id) for author_id in unique_ids)
                )
            )
        return authors

    async def create_author_collection(
        self,
        authors_data: Sequence[AuthorForCreationDto]
    ) -> list[Author]:
        authors = [self.mappers.map(author_data, Author) for author_data in authors_data]
        await self.repository.add_authors(authors)
        logger.info("Author collection created", extra={'count': len(authors)})
        return authors

    # ------------------------------------------------------------------
    # Books
    # ------------------------------------------------------------------

    async def list_books_for_author(
        self,
        author_id: UUID,
        sort_clauses: Sequence[SortClause]
    ) -> list[Book]:
        await self.ensure_author_exists(author_id)
        return await self.repository.get_books_for_author(author_id, sort_clauses)

    async def get_book_for_author(self, author_id: UUID, book_id: UUID) -> Book:
        """Get one of an author's books.

        Raises:
            ResourceNotFoundError: If the author or the book does not exist
        """
        await self.ensure_author_exists(author_id)
        book = await self.repository.get_book_for_author(author_id, book_id)
        if book is None:
            raise ResourceNotFoundError(
                ErrorMessages.BOOK_NOT_FOUND.format(book_id=book_id, author_id=author_id)
            )
        return book

    async def create_book_for_author(self, author_id: UUID, book_data: BookForCreationDto) -> Book:
        await self.ensure_author_exists(author_id)
        book = self.mappers.map(book_data, Book)
        await self.repository.add_book_for_author(author_id, book)
        logger.info("Book created", extra={'author_id': str(author_id), 'book_id': str(book.id)})
        return book

    async def upsert_book_for_author(
        self,
        author_id: UUID,
        book_id: UUID,
        book_data: BookForUpdateDto
    ) -> tuple[Book, bool]:
        """Fully update a book, creating it under the given ID when it does not exist.

        Returns:
            Tuple of (book, created)
        """
        await self.ensure_author_exists(author_id)
        book = await self.repository.get_book_for_author(author_id, book_id)

        if book is None:
            if await self.repository.book_exists(book_id):
                raise ResourceConflictError(
                    f"Book {book_id} already exists for another author"
                )
            book = self.mappers.map(book_data, Book)
            book.id = book_id
            await self.repository.add_book_for_author(author_id, book)
            logger.info("Book upserted", extra={'author_id': str(author_id), 'book_id': str(book_id)})
            return book, True

        apply_book_update(book_data, book)
        await self.repository.update_book(book)
        logger.info("Book updated", extra={'author_id': str(author_id), 'book_id': str(book_id)})
        return book, False

    async def delete_book_for_author(self, author_id: UUID, book_id: UUID) -> None:
        book = await self.get_book_for_author(author_id, book_id)
        await self.repository.delete_book(book)
        logger.info("Book deleted", extra={'author_id': str(author_id), 'book_id': str(book_id)})
