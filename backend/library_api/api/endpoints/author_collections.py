"""Author Collection Endpoints.

Create several authors in one request and read them back by a
parenthesised, comma-separated list of IDs: `/authorcollections/(id1,id2)`.
"""

from fastapi import APIRouter, Body, Depends, Request, Response, status

from ...core.constants import ErrorMessages, HttpHeaders, RouteNames
from ...core.exceptions import InvalidIdentifiersError
from ...domain.transformers import MapperRegistry
from ...schemas import AuthorDto, AuthorForCreationDto, ErrorResponse
from ...services.library_service import LibraryService
from ...utils.converters import parse_uuid_list
from ...utils.transaction_helpers import safe_transaction
from ..dependencies import get_library_service, get_mappers

router = APIRouter()


@router.get(
    "/({ids})",
    name=RouteNames.GET_AUTHOR_COLLECTION,
    response_model=list[AuthorDto],
    summary="Get several authors by ID",
    responses={
        400: {"model": ErrorResponse, "description": "Malformed identifier list"},
        404: {"model": ErrorResponse, "description": "One or more authors not found"},
    }
)
async def get_author_collection(
    ids: str,
    service: LibraryService = Depends(get_library_service),
    mappers: MapperRegistry = Depends(get_mappers)
):
    try:
        author_ids = parse_uuid_list(ids)
    except ValueError:
        raise InvalidIdentifiersError(ErrorMessages.INVALID_IDENTIFIERS.format(ids=ids)) from None

    authors = await service.get_author_collection(author_ids)
    return mappers.map_many(authors, AuthorDto)


@router.post(
    "",
    name=RouteNames.CREATE_AUTHOR_COLLECTION,
    response_model=list[AuthorDto],
    status_code=status.HTTP_201_CREATED,
    summary="Create several authors",
    responses={422: {"description": "Invalid author in the collection"}}
)
async def create_author_collection(
    request: Request,
    response: Response,
    authors_data: list[AuthorForCreationDto] = Body(..., min_length=1),
    service: LibraryService = Depends(get_library_service),
    mappers: MapperRegistry = Depends(get_mappers)
):
    """Create every author in the body; the Location header addresses them all."""
    async with safe_transaction(service.db):
        authors = await service.create_author_collection(authors_data)

    ids = ",".join(str(author.id) for author in authors)
    response.headers[HttpHeaders.LOCATION] = str(
        request.url_for(RouteNames.GET_AUTHOR_COLLECTION, ids=ids)
    )
    return mappers.map_many(authors, AuthorDto)
