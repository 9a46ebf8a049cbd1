"""
Unit Tests for Entity <-> DTO Mapping
"""

from datetime import date
from uuid import uuid4

import pytest

from library_api.core.exceptions import ConfigurationError
from library_api.domain.library_resources import build_mappers
from library_api.domain.transformers import MapperRegistry, apply_book_update
from library_api.models import Author, Book
from library_api.schemas import AuthorDto, AuthorForCreationDto, BookDto, BookForUpdateDto
from library_api.utils import calculate_age


@pytest.fixture()
def mappers():
    return build_mappers()


class TestLibraryMappers:
    """Test suite for the registered library mappers"""

    def test_author_to_dto(self, mappers):
        """Test full name and age at death"""
        author = Author(
            id=uuid4(),
            first_name="Douglas",
            last_name="Adams",
            date_of_birth=date(1952, 3, 11),
            date_of_death=date(2001, 5, 11),
            genre="Science fiction"
        )

        dto = mappers.map(author, AuthorDto)

        assert dto.name == "Douglas Adams"
        assert dto.age == 49
        assert dto.id == author.id

    def test_book_to_dto(self, mappers):
        book = Book(id=uuid4(), title="It", description="Clowns", author_id=uuid4())

        dto = mappers.map(book, BookDto)

        assert dto.author_id == book.author_id
        assert dto.model_dump(by_alias=True)["authorId"] == book.author_id

    def test_author_creation_includes_books(self, mappers):
        payload = AuthorForCreationDto.model_validate({
            "firstName": "Ursula",
            "lastName": "Le Guin",
            "dateOfBirth": "1929-10-21",
            "genre": "Fantasy",
            "books": [{"title": "Tehanu", "description": "Fourth Earthsea book"}],
        })

        author = mappers.map(payload, Author)

        assert author.first_name == "Ursula"
        assert [book.title for book in author.books] == ["Tehanu"]

    def test_map_many_keeps_order(self, mappers):
        books = [Book(id=uuid4(), title=title, author_id=uuid4()) for title in ("B", "A")]

        assert [dto.title for dto in mappers.map_many(books, BookDto)] == ["B", "A"]

    def test_missing_mapper_raises(self, mappers):
        with pytest.raises(ConfigurationError):
            mappers.map(Author(), BookDto)

    def test_registry_is_frozen(self, mappers):
        with pytest.raises(ConfigurationError):
            mappers.register(Book, AuthorDto, lambda book: book)

    def test_duplicate_registration_rejected(self):
        registry = MapperRegistry()
        registry.register(Book, BookDto, lambda book: book)

        with pytest.raises(ConfigurationError):
            registry.register(Book, BookDto, lambda book: book)

    def test_apply_book_update(self):
        book = Book(id=uuid4(), title="Old", description="Old description", author_id=uuid4())

        apply_book_update(BookForUpdateDto(title="New", description="New description"), book)

        assert (book.title, book.description) == ("New", "New description")


class TestCalculateAge:

    def test_before_and_after_birthday(self):
        assert calculate_age(date(1950, 6, 15), date(2000, 6, 14)) == 49
        assert calculate_age(date(1950, 6, 15), date(2000, 6, 15)) == 50

    def test_living_author_uses_today(self):
        assert calculate_age(date(1900, 1, 1)) == date.today().year - 1900
