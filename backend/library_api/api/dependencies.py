"""FastAPI Dependencies.

Provides the per-request services and the parsed resource parameters used by
the endpoints.
"""

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.constants import Pagination, ResourceQuery
from ..db.database import get_db
from ..domain.transformers import MapperRegistry
from ..services.library_service import LibraryService
from ..services.shaping_service import ResourceShapingService
from ..shaping import AuthorsResourceParameters, BooksResourceParameters, ShapingContext


def get_shaping_context(request: Request) -> ShapingContext:
    """Shaping registries built when the application was created."""
    return request.app.state.shaping


def get_mappers(request: Request) -> MapperRegistry:
    return request.app.state.mappers


def get_shaping_service(
    request: Request,
    context: ShapingContext = Depends(get_shaping_context),
    mappers: MapperRegistry = Depends(get_mappers)
) -> ResourceShapingService:
    """Shaping service for the current request.

    Negotiates the representation, so an unsatisfiable Accept header is
    rejected with 406 before the endpoint runs.
    """
    return ResourceShapingService(context, mappers, request)


def get_library_service(
    db: AsyncSession = Depends(get_db),
    mappers: MapperRegistry = Depends(get_mappers)
) -> LibraryService:
    return LibraryService(db, mappers)


def authors_resource_parameters(
    page_number: int = Query(
        Pagination.DEFAULT_PAGE,
        alias=Pagination.PAGE_NUMBER_PARAM,
        ge=1,
        description="Page number (1-indexed)"
    ),
    page_size: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        alias=Pagination.PAGE_SIZE_PARAM,
        ge=Pagination.MIN_PAGE_SIZE,
        le=settings.MAX_PAGE_SIZE,
        description="Items per page"
    ),
    fields: str | None = Query(
        None,
        alias=ResourceQuery.FIELDS,
        description="Comma-separated list of fields to return (e.g. id,name)"
    ),
    order_by: str = Query(
        ResourceQuery.DEFAULT_AUTHOR_ORDER_BY,
        alias=ResourceQuery.ORDER_BY,
        description="Comma-separated sort clauses, each `Field` or `Field desc`"
    ),
    search_query: str | None = Query(
        None,
        alias=ResourceQuery.SEARCH_QUERY,
        description="Matches genre, first name or last name"
    ),
    genre: str | None = Query(None, alias=ResourceQuery.GENRE, description="Exact genre filter")
) -> AuthorsResourceParameters:
    return AuthorsResourceParameters(
        page_number=page_number,
        page_size=page_size,
        fields=fields,
        order_by=order_by,
        search_query=search_query,
        genre=genre
    )


def books_resource_parameters(
    fields: str | None = Query(None, alias=ResourceQuery.FIELDS),
    order_by: str = Query(ResourceQuery.DEFAULT_BOOK_ORDER_BY, alias=ResourceQuery.ORDER_BY)
) -> BooksResourceParameters:
    return BooksResourceParameters(fields=fields, order_by=order_by)
