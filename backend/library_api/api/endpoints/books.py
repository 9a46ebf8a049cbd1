"""Book Endpoints.

Books are nested under their author. The list is not paged but supports
sorting and field selection; both list and resource are negotiated.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from ...core.constants import HttpHeaders, ResourceKinds, ResourceQuery, RouteNames
from ...domain.library_resources import book_identifiers
from ...models import Book
from ...schemas import BookDto, BookForCreationDto, BookForUpdateDto, ErrorResponse, describe_links
from ...services.library_service import LibraryService
from ...services.shaping_service import ResourceShapingService, to_response
from ...shaping import BooksResourceParameters
from ...utils.transaction_helpers import safe_transaction
from ..dependencies import books_resource_parameters, get_library_service, get_shaping_service

router = APIRouter()

AUTHOR_NOT_FOUND_RESPONSE = {"model": ErrorResponse, "description": "Author or book not found"}


def _book_location(request: Request, book: Book) -> str:
    return str(
        request.url_for(
            RouteNames.GET_BOOK_FOR_AUTHOR,
            author_id=str(book.author_id),
            book_id=str(book.id)
        )
    )


@router.get(
    "",
    name=RouteNames.GET_BOOKS_FOR_AUTHOR,
    summary="List an author's books",
    responses={
        200: describe_links(),
        400: {"model": ErrorResponse, "description": "Unknown sort or shaping field"},
        404: AUTHOR_NOT_FOUND_RESPONSE,
        406: {"model": ErrorResponse, "description": "Unsupported Accept media type"},
    }
)
async def get_books_for_author(
    author_id: UUID,
    params: BooksResourceParameters = Depends(books_resource_parameters),
    shaping: ResourceShapingService = Depends(get_shaping_service),
    service: LibraryService = Depends(get_library_service)
):
    sort_clauses = shaping.validate_collection(BookDto, Book, params, ResourceKinds.BOOK)
    books = await service.list_books_for_author(author_id, sort_clauses)

    composed = shaping.compose_collection(
        books,
        BookDto,
        ResourceKinds.BOOK,
        RouteNames.GET_BOOKS_FOR_AUTHOR,
        params,
        book_identifiers,
        route_values={"author_id": author_id}
    )
    return to_response(composed)


@router.get(
    "/{book_id}",
    name=RouteNames.GET_BOOK_FOR_AUTHOR,
    summary="Get one of an author's books",
    responses={
        200: describe_links(),
        400: {"model": ErrorResponse, "description": "Unknown shaping field"},
        404: AUTHOR_NOT_FOUND_RESPONSE,
        406: {"model": ErrorResponse, "description": "Unsupported Accept media type"},
    }
)
async def get_book_for_author(
    author_id: UUID,
    book_id: UUID,
    fields: str | None = Query(None, alias=ResourceQuery.FIELDS),
    shaping: ResourceShapingService = Depends(get_shaping_service),
    service: LibraryService = Depends(get_library_service)
):
    shaping.validate_fields(BookDto, fields, ResourceKinds.BOOK)
    book = await service.get_book_for_author(author_id, book_id)
    return to_response(
        shaping.compose_resource(book, BookDto, ResourceKinds.BOOK, book_identifiers, fields)
    )


@router.post(
    "",
    name=RouteNames.CREATE_BOOK_FOR_AUTHOR,
    status_code=status.HTTP_201_CREATED,
    summary="Create a book for an author",
    responses={
        201: describe_links(),
        404: AUTHOR_NOT_FOUND_RESPONSE,
        422: {"description": "Invalid book"},
    }
)
async def create_book_for_author(
    author_id: UUID,
    book_data: BookForCreationDto,
    request: Request,
    shaping: ResourceShapingService = Depends(get_shaping_service),
    service: LibraryService = Depends(get_library_service)
):
    async with safe_transaction(service.db):
        book = await service.create_book_for_author(author_id, book_data)

    return to_response(
        shaping.compose_resource(book, BookDto, ResourceKinds.BOOK, book_identifiers),
        status_code=status.HTTP_201_CREATED,
        headers={HttpHeaders.LOCATION: _book_location(request, book)}
    )


@router.put(
    "/{book_id}",
    name=RouteNames.UPDATE_BOOK_FOR_AUTHOR,
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Fully update a book (creates it when missing)",
    responses={
        201: describe_links({"description": "Book created under the given ID"}),
        404: {"model": ErrorResponse, "description": "Author not found"},
        409: {"model": ErrorResponse, "description": "Book ID belongs to another author"},
        422: {"description": "Invalid book"},
    }
)
async def update_book_for_author(
    author_id: UUID,
    book_id: UUID,
    book_data: BookForUpdateDto,
    request: Request,
    shaping: ResourceShapingService = Depends(get_shaping_service),
    service: LibraryService = Depends(get_library_service)
):
    """Replace a book. Unknown book IDs are created (201); updates return 204."""
    async with safe_transaction(service.db):
        book, created = await service.upsert_book_for_author(author_id, book_id, book_data)

    if not created:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return to_response(
        shaping.compose_resource(book, BookDto, ResourceKinds.BOOK, book_identifiers),
        status_code=status.HTTP_201_CREATED,
        headers={HttpHeaders.LOCATION: _book_location(request, book)}
    )


@router.delete(
    "/{book_id}",
    name=RouteNames.DELETE_BOOK_FOR_AUTHOR,
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete one of an author's books",
    responses={404: AUTHOR_NOT_FOUND_RESPONSE}
)
async def delete_book_for_author(
    author_id: UUID,
    book_id: UUID,
    service: LibraryService = Depends(get_library_service)
):
    async with safe_transaction(service.db):
        await service.delete_book_for_author(author_id, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
