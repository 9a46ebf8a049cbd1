"""Request and response schemas."""

from .author import AuthorDto, AuthorForCreationDto
from .book import BookDto, BookForCreationDto, BookForUpdateDto
from .common import ErrorResponse, describe_links

__all__ = [
    "AuthorDto",
    "AuthorForCreationDto",
    "BookDto",
    "BookForCreationDto",
    "BookForUpdateDto",
    "ErrorResponse",
    "describe_links",
]
