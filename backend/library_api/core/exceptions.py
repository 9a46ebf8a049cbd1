"""Custom Exceptions for Request Shaping and Resource Handling.

This module defines the exception classes raised by the shaping core and the
resource endpoints. Every exception carries the HTTP status it maps to so a
single set of FastAPI handlers can turn them into error responses.

Client errors are problems with the request itself and are not logged as
failures of the service:
- Unknown sort field or malformed sort clause
- Unknown field in a data-shaping request
- Unsupported media type in the Accept header
- Missing or conflicting resources

Server errors mean the service cannot answer correctly and must be fixed:
- Missing or duplicate registrations (property mappings, mappers, link tables)
- Routes that cannot be resolved into links
"""

from fastapi import status


class LibraryApiError(Exception):
    """Base exception for all Library API errors."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "LIBRARY_API_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(LibraryApiError):
    """The request cannot be served as asked. Nothing is partially applied."""
    http_status = status.HTTP_400_BAD_REQUEST
    error_code = "INVALID_REQUEST"


class InvalidOrderByError(InvalidRequestError):
    """A sort clause names an unknown field or is malformed."""
    error_code = "INVALID_ORDER_BY"


class InvalidFieldsError(InvalidRequestError):
    """A data-shaping request names a field the resource does not expose."""
    error_code = "INVALID_FIELDS"


class InvalidIdentifiersError(InvalidRequestError):
    """A list of resource identifiers could not be parsed."""
    error_code = "INVALID_IDENTIFIERS"


class NotAcceptableError(LibraryApiError):
    """None of the media types in the Accept header can be produced."""
    http_status = status.HTTP_406_NOT_ACCEPTABLE
    error_code = "NOT_ACCEPTABLE"


class ResourceNotFoundError(LibraryApiError):
    """The addressed resource does not exist."""
    http_status = status.HTTP_404_NOT_FOUND
    error_code = "RESOURCE_NOT_FOUND"


class ResourceConflictError(LibraryApiError):
    """The resource already exists."""
    http_status = status.HTTP_409_CONFLICT
    error_code = "RESOURCE_CONFLICT"


class ConfigurationError(LibraryApiError):
    """A registration is missing, duplicated or made after startup.

    These are programming errors: the affected resource cannot be served
    correctly until the startup wiring is fixed.
    """
    error_code = "CONFIGURATION_ERROR"


class RouteResolutionError(LibraryApiError):
    """A link could not be built because its route or a route parameter is unknown."""
    error_code = "ROUTE_RESOLUTION_ERROR"
