"""Resource parameters parsed from the query string.

Instances are immutable. Range checks (page number, page size) happen at the
HTTP boundary before a parameter object is built; nothing here clamps.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import Pagination, ResourceQuery

PAGING_FIELDS = {"page_number", "page_size"}


class ShapingParameters(BaseModel):
    """Field selection and sorting for a resource or an unpaged collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    fields: str | None = Field(default=None, alias=ResourceQuery.FIELDS)
    order_by: str | None = Field(default=None, alias=ResourceQuery.ORDER_BY)

    def filter_params(self) -> dict[str, Any]:
        """Every non-pagination parameter the client supplied, keyed by wire name."""
        dumped = self.model_dump(by_alias=True, exclude=PAGING_FIELDS)
        return {
            name: value
            for name, value in dumped.items()
            if value is not None and value != ""
        }

    def to_query_params(self) -> dict[str, Any]:
        return self.filter_params()


class PagedResourceParameters(ShapingParameters):
    """Shaping parameters plus offset paging."""

    page_number: int = Field(default=Pagination.DEFAULT_PAGE, alias=Pagination.PAGE_NUMBER_PARAM)
    page_size: int = Field(default=10, alias=Pagination.PAGE_SIZE_PARAM)

    def with_page(self, page_number: int) -> "PagedResourceParameters":
        """Copy of these parameters pointing at another page."""
        return self.model_copy(update={"page_number": page_number})

    def to_query_params(self) -> dict[str, Any]:
        params = self.filter_params()
        params[Pagination.PAGE_NUMBER_PARAM] = self.page_number
        params[Pagination.PAGE_SIZE_PARAM] = self.page_size
        return params


class AuthorsResourceParameters(PagedResourceParameters):
    """Query parameters accepted by the authors collection."""

    order_by: str | None = Field(
        default=ResourceQuery.DEFAULT_AUTHOR_ORDER_BY,
        alias=ResourceQuery.ORDER_BY
    )
    search_query: str | None = Field(default=None, alias=ResourceQuery.SEARCH_QUERY)
    genre: str | None = Field(default=None, alias=ResourceQuery.GENRE)


class BooksResourceParameters(ShapingParameters):
    """Query parameters accepted by an author's (unpaged) book list."""

    order_by: str | None = Field(
        default=ResourceQuery.DEFAULT_BOOK_ORDER_BY,
        alias=ResourceQuery.ORDER_BY
    )
