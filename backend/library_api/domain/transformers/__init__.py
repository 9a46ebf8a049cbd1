"""Data transformers.

Responsible for converting between different data representations:
- ORM models → Response DTOs
- Request DTOs → ORM models
"""

from .library import apply_book_update, register_library_mappers
from .mapper import MapperRegistry

__all__ = [
    "MapperRegistry",
    "apply_book_update",
    "register_library_mappers",
]
