"""Request ID Middleware.

Every log line written while serving a request carries its request id.
"""

import time

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.constants import ErrorMessages, HttpHeaders
from ..core.logging import get_logger, set_request_id

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a request id and reports how the request went.

    A client-supplied `X-Request-ID` is reused; otherwise one is generated.
    The id is stored in the logging context var and echoed in the response
    together with the processing time.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = set_request_id(request.headers.get(HttpHeaders.REQUEST_ID) or None)

        logger.info(
            "Request started",
            extra={
                'method': request.method,
                'path': request.url.path,
                'accept': request.headers.get(HttpHeaders.ACCEPT),
                'client': request.client.host if request.client else 'unknown'
            }
        )

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={'error': str(e), 'process_time': time.time() - start_time},
                exc_info=True
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": ErrorMessages.INTERNAL_SERVER_ERROR,
                    "request_id": request_id
                },
                headers={HttpHeaders.REQUEST_ID: request_id}
            )

        process_time = time.time() - start_time
        response.headers[HttpHeaders.REQUEST_ID] = request_id
        response.headers[HttpHeaders.PROCESS_TIME] = str(process_time)

        logger.info(
            "Request completed",
            extra={
                'status_code': response.status_code,
                'content_type': response.headers.get(HttpHeaders.CONTENT_TYPE),
                'process_time': process_time
            }
        )
        return response
