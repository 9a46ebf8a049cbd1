"""Shaping registrations for the library resources.

Everything a request needs to shape, sort and link authors and books is
registered here once, then frozen:
- property mappings (sortable DTO names -> entity columns)
- shaped DTO types (field accessor tables)
- link tables per resource kind
- entity <-> DTO mappers
"""

from ..core.constants import LinkRelations, ResourceKinds, RouteNames
from ..core.logging import get_logger
from ..models import Author, Book
from ..schemas import AuthorDto, BookDto
from ..shaping import LinkTemplate, PropertyMappingValue, ShapingContext
from .transformers import MapperRegistry, register_library_mappers

logger = get_logger(__name__)

AUTHOR_PROPERTY_MAPPING = {
    "Id": [PropertyMappingValue("id")],
    "Genre": [PropertyMappingValue("genre")],
    "Age": [PropertyMappingValue("date_of_birth", revert=True)],
    "Name": [PropertyMappingValue("first_name"), PropertyMappingValue("last_name")],
}

BOOK_PROPERTY_MAPPING = {
    "Id": [PropertyMappingValue("id")],
    "Title": [PropertyMappingValue("title")],
    "Description": [PropertyMappingValue("description")],
}

AUTHOR_LINKS = (
    LinkTemplate(LinkRelations.SELF, "GET", RouteNames.GET_AUTHOR, ("author_id",), include_fields=True),
    LinkTemplate(LinkRelations.DELETE_AUTHOR, "DELETE", RouteNames.DELETE_AUTHOR, ("author_id",)),
    LinkTemplate(LinkRelations.CREATE_BOOK_FOR_AUTHOR, "POST", RouteNames.CREATE_BOOK_FOR_AUTHOR, ("author_id",)),
    LinkTemplate(LinkRelations.BOOKS, "GET", RouteNames.GET_BOOKS_FOR_AUTHOR, ("author_id",)),
)

BOOK_LINKS = (
    LinkTemplate(
        LinkRelations.SELF, "GET", RouteNames.GET_BOOK_FOR_AUTHOR,
        ("author_id", "book_id"), include_fields=True
    ),
    LinkTemplate(LinkRelations.DELETE_BOOK, "DELETE", RouteNames.DELETE_BOOK_FOR_AUTHOR, ("author_id", "book_id")),
    LinkTemplate(LinkRelations.UPDATE_BOOK, "PUT", RouteNames.UPDATE_BOOK_FOR_AUTHOR, ("author_id", "book_id")),
)


def build_shaping_context() -> ShapingContext:
    """Register the library resources and freeze the registries."""
    context = ShapingContext()

    context.property_mappings.register(AuthorDto, Author, AUTHOR_PROPERTY_MAPPING)
    context.property_mappings.register(BookDto, Book, BOOK_PROPERTY_MAPPING)

    context.projector.register(AuthorDto)
    context.projector.register(BookDto)

    context.link_tables.register(ResourceKinds.AUTHOR, AUTHOR_LINKS)
    context.link_tables.register(ResourceKinds.BOOK, BOOK_LINKS)

    context.freeze()
    logger.info(
        "Shaping registries initialized",
        extra={
            'shaped_types': [AuthorDto.__name__, BookDto.__name__],
            'media_types': context.composer.media_types
        }
    )
    return context


def build_mappers() -> MapperRegistry:
    """Register the library mappers and freeze the registry."""
    mappers = register_library_mappers(MapperRegistry())
    mappers.freeze()
    return mappers


def author_identifiers(author: Author | AuthorDto) -> dict:
    return {"author_id": author.id}


def book_identifiers(book: Book | BookDto) -> dict:
    return {"author_id": book.author_id, "book_id": book.id}
