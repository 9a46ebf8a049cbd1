"""Models package.

Export all models for easy importing
"""

from .author import Author
from .book import Book

__all__ = [
    "Author",
    "Book",
]
