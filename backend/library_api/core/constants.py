"""Application Constants.

Centralized constants used throughout the application.
This file contains all hardcoded values that should be maintained in one place.
"""

# ============================================================================
# PAGINATION CONSTANTS
# ============================================================================

class Pagination:
    """Pagination defaults and limits."""
    DEFAULT_PAGE = 1
    MIN_PAGE_SIZE = 1

    # Query parameter names as they appear on the wire
    PAGE_NUMBER_PARAM = "pageNumber"
    PAGE_SIZE_PARAM = "pageSize"


class ResourceQuery:
    """Query parameter names shared by shaped resources."""
    FIELDS = "fields"
    ORDER_BY = "orderBy"
    SEARCH_QUERY = "searchQuery"
    GENRE = "genre"

    DEFAULT_AUTHOR_ORDER_BY = "Name"
    DEFAULT_BOOK_ORDER_BY = "Title"


# ============================================================================
# MEDIA TYPE CONSTANTS
# ============================================================================

class MediaTypes:
    """Media types understood by content negotiation."""
    JSON = "application/json"
    HATEOAS_JSON = "application/vnd.marvin.hateoas+json"
    ANY = "*/*"

    DEFAULT = JSON


# ============================================================================
# ROUTE NAME CONSTANTS
# ============================================================================

class RouteNames:
    """Route names used to build links (must match the routers' `name=`)."""
    GET_AUTHORS = "GetAuthors"
    GET_AUTHOR = "GetAuthor"
    CREATE_AUTHOR = "CreateAuthor"
    BLOCK_AUTHOR_CREATION = "BlockAuthorCreation"
    DELETE_AUTHOR = "DeleteAuthor"

    GET_BOOKS_FOR_AUTHOR = "GetBooksForAuthor"
    GET_BOOK_FOR_AUTHOR = "GetBookForAuthor"
    CREATE_BOOK_FOR_AUTHOR = "CreateBookForAuthor"
    UPDATE_BOOK_FOR_AUTHOR = "UpdateBookForAuthor"
    DELETE_BOOK_FOR_AUTHOR = "DeleteBookForAuthor"

    GET_AUTHOR_COLLECTION = "GetAuthorCollection"
    CREATE_AUTHOR_COLLECTION = "CreateAuthorCollection"


class LinkRelations:
    """Link relation names."""
    SELF = "self"
    NEXT_PAGE = "next_page"
    PREVIOUS_PAGE = "previous_page"
    DELETE_AUTHOR = "delete_author"
    CREATE_BOOK_FOR_AUTHOR = "create_book_for_author"
    BOOKS = "books"
    UPDATE_BOOK = "update_book"
    DELETE_BOOK = "delete_book"


class ResourceKinds:
    """Resource kinds that own a link table."""
    AUTHOR = "author"
    BOOK = "book"


# ============================================================================
# ERROR MESSAGES
# ============================================================================

class ErrorMessages:
    """Standard error messages."""
    INTERNAL_SERVER_ERROR = "An unexpected fault happened. Try again later."
    AUTHOR_NOT_FOUND = "Author {author_id} not found"
    AUTHOR_ALREADY_EXISTS = "Author {author_id} already exists"
    BOOK_NOT_FOUND = "Book {book_id} not found for author {author_id}"
    AUTHOR_COLLECTION_INCOMPLETE = "One or more authors in ({ids}) were not found"
    INVALID_IDENTIFIERS = "Invalid identifier list: {ids}"
    INVALID_ORDER_BY = "Cannot sort by '{order_by}': unknown or malformed sort field"
    INVALID_FIELDS = "Cannot shape response: unknown field(s) in '{fields}'"
    NOT_ACCEPTABLE = "None of the requested media types are supported: {accept}"
    MAPPING_NOT_REGISTERED = "No {kind} registered for {source} -> {destination}"
    MAPPING_ALREADY_REGISTERED = "A {kind} is already registered for {source} -> {destination}"
    REGISTRY_FROZEN = "{registry} is frozen; registration must happen at startup"
    ROUTE_NOT_RESOLVED = "Cannot build a link for route '{route_name}': {reason}"


# ============================================================================
# HTTP HEADERS
# ============================================================================

class HttpHeaders:
    """HTTP header names."""
    REQUEST_ID = "X-Request-ID"
    PROCESS_TIME = "X-Process-Time"
    PAGINATION = "X-Pagination"
    LOCATION = "Location"
    ACCEPT = "Accept"
    CONTENT_TYPE = "Content-Type"


# ============================================================================
# API ENDPOINTS
# ============================================================================

class ApiEndpoints:
    """API endpoint paths."""
    DOCS = "/docs"
    REDOC = "/redoc"
    OPENAPI = "/openapi.json"
    HEALTH = "/health"
    ROOT = "/"


# ============================================================================
# HTTP STATUS CONSTANTS
# ============================================================================

class HttpStatusCodes:
    """HTTP status codes used outside of FastAPI's `status` module."""
    INTERNAL_SERVER_ERROR = 500


# ============================================================================
# METRICS CONSTANTS
# ============================================================================

class Metrics:
    """Metrics-related constants."""
    ENDPOINT_PATH = "/metrics"
