"""Author Endpoints.

Paged, searchable, sortable and shapeable author collection plus the single
author resource. Collection and resource responses are negotiated: plain JSON
or the hypermedia media type with links.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from ...core.constants import HttpHeaders, ResourceKinds, ResourceQuery, RouteNames
from ...domain.library_resources import author_identifiers
from ...models import Author
from ...schemas import AuthorDto, AuthorForCreationDto, ErrorResponse, describe_links
from ...services.library_service import LibraryService
from ...services.shaping_service import ResourceShapingService, to_response
from ...shaping import AuthorsResourceParameters
from ...utils.transaction_helpers import safe_transaction
from ..dependencies import authors_resource_parameters, get_library_service, get_shaping_service

router = APIRouter()


@router.get(
    "",
    name=RouteNames.GET_AUTHORS,
    summary="List authors",
    responses={
        200: describe_links({"headers": {HttpHeaders.PAGINATION: {"description": "Paging metadata (JSON)"}}}),
        400: {"model": ErrorResponse, "description": "Unknown sort or shaping field"},
        406: {"model": ErrorResponse, "description": "Unsupported Accept media type"},
        422: {"description": "pageNumber / pageSize out of range"},
    }
)
async def get_authors(
    params: AuthorsResourceParameters = Depends(authors_resource_parameters),
    shaping: ResourceShapingService = Depends(get_shaping_service),
    service: LibraryService = Depends(get_library_service)
):
    """List authors one page at a time.

    - **searchQuery** / **genre**: filter the authors
    - **orderBy**: e.g. `Name`, `Age desc`, `Genre,Name desc`
    - **fields**: e.g. `id,name`
    - **pageNumber** / **pageSize**: paging (pageSize is capped)

    Paging metadata is returned in the `X-Pagination` header.
    """
    sort_clauses = shaping.validate_collection(AuthorDto, Author, params, ResourceKinds.AUTHOR)
    authors, total_count = await service.list_authors(params, sort_clauses)

    composed = shaping.compose_collection(
        authors,
        AuthorDto,
        ResourceKinds.AUTHOR,
        RouteNames.GET_AUTHORS,
        params,
        author_identifiers,
        total_count=total_count
    )
    return to_response(composed)


@router.get(
    "/{author_id}",
    name=RouteNames.GET_AUTHOR,
    summary="Get an author",
    responses={
        200: describe_links(),
        400: {"model": ErrorResponse, "description": "Unknown shaping field"},
        404: {"model": ErrorResponse, "description": "Author not found"},
        406: {"model": ErrorResponse, "description": "Unsupported Accept media type"},
    }
)
async def get_author(
    author_id: UUID,
    fields: str | None = Query(None, alias=ResourceQuery.FIELDS),
    shaping: ResourceShapingService = Depends(get_shaping_service),
    service: LibraryService = Depends(get_library_service)
):
    shaping.validate_fields(AuthorDto, fields, ResourceKinds.AUTHOR)
    author = await service.get_author(author_id)
    return to_response(
        shaping.compose_resource(author, AuthorDto, ResourceKinds.AUTHOR, author_identifiers, fields)
    )


@router.post(
    "",
    name=RouteNames.CREATE_AUTHOR,
    status_code=status.HTTP_201_CREATED,
    summary="Create an author",
    responses={
        201: describe_links(),
        406: {"model": ErrorResponse, "description": "Unsupported Accept media type"},
        422: {"description": "Invalid author"},
    }
)
async def create_author(
    author_data: AuthorForCreationDto,
    request: Request,
    shaping: ResourceShapingService = Depends(get_shaping_service),
    service: LibraryService = Depends(get_library_service)
):
    """Create an author, optionally together with books."""
    async with safe_transaction(service.db):
        author = await service.create_author(author_data)

    location = request.url_for(RouteNames.GET_AUTHOR, author_id=str(author.id))
    return to_response(
        shaping.compose_resource(author, AuthorDto, ResourceKinds.AUTHOR, author_identifiers),
        status_code=status.HTTP_201_CREATED,
        headers={HttpHeaders.LOCATION: str(location)}
    )


@router.post(
    "/{author_id}",
    name=RouteNames.BLOCK_AUTHOR_CREATION,
    summary="Reject creation under an explicit ID",
    responses={
        404: {"model": ErrorResponse, "description": "Author not found"},
        409: {"model": ErrorResponse, "description": "Author already exists"},
    }
)
async def block_author_creation(
    author_id: UUID,
    service: LibraryService = Depends(get_library_service)
):
    """Authors cannot be created under a client-chosen ID."""
    await service.block_author_creation(author_id)


@router.delete(
    "/{author_id}",
    name=RouteNames.DELETE_AUTHOR,
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author and their books",
    responses={404: {"model": ErrorResponse, "description": "Author not found"}}
)
async def delete_author(
    author_id: UUID,
    service: LibraryService = Depends(get_library_service)
):
    async with safe_transaction(service.db):
        await service.delete_author(author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
