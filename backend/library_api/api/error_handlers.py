"""Error Handlers.

Global exception handlers turning errors into `ErrorResponse` bodies:
- LibraryApiError -> its own HTTP status and error code
- RequestValidationError -> 422 with field-level details
- Exception (catch-all) -> 500 without internal details
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.constants import ErrorMessages, HttpHeaders
from ..core.exceptions import ConfigurationError, LibraryApiError
from ..core.logging import get_logger, get_request_id
from ..schemas.common import ErrorResponse

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_library_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    headers = {HttpHeaders.REQUEST_ID: body.request_id} if body.request_id else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers
    )


def _register_library_error_handler(app: FastAPI) -> None:

    @app.exception_handler(LibraryApiError)
    async def library_error_handler(request: Request, exc: LibraryApiError):
        extra = {'error_code': exc.error_code, 'path': request.url.path}
        if isinstance(exc, ConfigurationError):
            logger.critical(exc.message, extra=extra)
        elif exc.http_status >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(exc.message, extra=extra)
        else:
            logger.info(exc.message, extra=extra)

        return _error_response(
            exc.http_status,
            ErrorResponse(
                error=exc.error_code,
                detail=exc.message,
                request_id=get_request_id()
            )
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Invalid query parameters or body: nothing was read or written."""
        errors = [
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        logger.info(
            "Request validation failed",
            extra={'path': request.url.path, 'errors': errors}
        )
        request_id = get_request_id()
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": "VALIDATION_ERROR",
                "detail": errors,
                "request_id": request_id,
            },
            headers={HttpHeaders.REQUEST_ID: request_id} if request_id else None
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            extra={'path': request.url.path, 'error': str(exc)},
            exc_info=True
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(
                error=ErrorMessages.INTERNAL_SERVER_ERROR,
                request_id=get_request_id()
            )
        )
