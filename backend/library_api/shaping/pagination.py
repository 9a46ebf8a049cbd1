"""Offset pagination metadata.

The repository slices the data; this module is the single source of truth for
the numbers derived from the total count. Page numbers past the last page are
legal: they produce an empty slice and accurate flags, never an error.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationMetadata:
    """Paging state of one collection response.

    `total_pages`, `has_next` and `has_previous` are always computed from the
    stored counts, never stored themselves.
    """
    total_count: int
    page_size: int
    current_page: int

    @property
    def total_pages(self) -> int:
        if self.total_count <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.total_count > 0 and self.current_page > 1

    def counts(self) -> dict[str, int]:
        """The four counts both representations publish, keyed by wire name."""
        return {
            "totalCount": self.total_count,
            "pageSize": self.page_size,
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
        }


def paginate(total_count: int, page_size: int, page_number: int) -> PaginationMetadata:
    """Compute paging metadata.

    `page_size` and `page_number` are expected to be validated already
    (both >= 1); no clamping happens here.
    """
    return PaginationMetadata(
        total_count=total_count,
        page_size=page_size,
        current_page=page_number
    )


def page_offset(page_size: int, page_number: int) -> int:
    """Number of items to skip before the requested page."""
    return (page_number - 1) * page_size


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """One page of items plus its metadata."""
    items: Sequence[T]
    pagination: PaginationMetadata

    @classmethod
    def create(
        cls,
        items: Sequence[T],
        total_count: int,
        page_size: int,
        page_number: int
    ) -> "PagedResult[T]":
        return cls(items=items, pagination=paginate(total_count, page_size, page_number))

    @property
    def total_count(self) -> int:
        return self.pagination.total_count

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages

    @property
    def has_next(self) -> bool:
        return self.pagination.has_next

    @property
    def has_previous(self) -> bool:
        return self.pagination.has_previous
