"""Repositories package.

Data access layer following Repository Pattern.
"""

from .library_repository import LibraryRepository

__all__ = ["LibraryRepository"]
