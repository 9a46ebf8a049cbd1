"""Mapping functions between library entities and DTOs."""

from ...models import Author, Book
from ...schemas import (
    AuthorDto,
    AuthorForCreationDto,
    BookDto,
    BookForCreationDto,
    BookForUpdateDto,
)
from ...utils import calculate_age
from .mapper import MapperRegistry


def author_to_dto(author: Author) -> AuthorDto:
    """Full name and age (at death, for dead authors) instead of the raw columns."""
    return AuthorDto(
        id=author.id,
        name=f"{author.first_name} {author.last_name}",
        age=calculate_age(author.date_of_birth, author.date_of_death),
        genre=author.genre,
    )


def book_to_dto(book: Book) -> BookDto:
    return BookDto(
        id=book.id,
        title=book.title,
        description=book.description,
        author_id=book.author_id,
    )


def book_for_creation_to_entity(book: BookForCreationDto) -> Book:
    return Book(title=book.title, description=book.description)


def author_for_creation_to_entity(author: AuthorForCreationDto) -> Author:
    return Author(
        first_name=author.first_name,
        last_name=author.last_name,
        date_of_birth=author.date_of_birth,
        date_of_death=author.date_of_death,
        genre=author.genre,
        books=[book_for_creation_to_entity(book) for book in author.books],
    )


def book_for_update_to_entity(book: BookForUpdateDto) -> Book:
    return Book(title=book.title, description=book.description)


def apply_book_update(update: BookForUpdateDto, book: Book) -> Book:
    """Copy every updatable field onto an existing book (PUT semantics)."""
    book.title = update.title
    book.description = update.description
    return book


def register_library_mappers(mappers: MapperRegistry) -> MapperRegistry:
    mappers.register(Author, AuthorDto, author_to_dto)
    mappers.register(Book, BookDto, book_to_dto)
    mappers.register(AuthorForCreationDto, Author, author_for_creation_to_entity)
    mappers.register(BookForCreationDto, Book, book_for_creation_to_entity)
    mappers.register(BookForUpdateDto, Book, book_for_update_to_entity)
    return mappers
