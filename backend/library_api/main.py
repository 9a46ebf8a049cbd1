"""Library API - Main Application.

REST API over authors and their books with data shaping (field selection,
validated sorting, paging) and content-negotiated hypermedia responses.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.endpoints import metrics as metrics_endpoint
from .api.error_handlers import register_error_handlers
from .api.router import api_router
from .core.config import settings
from .core.constants import ApiEndpoints, HttpHeaders
from .core.logging import get_logger, setup_logging
from .core.startup import create_lifespan
from .core.tracing import setup_tracing
from .db.database import engine
from .domain.library_resources import build_mappers, build_shaping_context
from .middleware import PrometheusMiddleware, RequestIDMiddleware

# Setup logging
setup_logging()
logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Build the application with its frozen shaping registries."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Authors and books with data shaping and HATEOAS responses",
        lifespan=create_lifespan(),
        docs_url=ApiEndpoints.DOCS,
        redoc_url=ApiEndpoints.REDOC,
        openapi_url=ApiEndpoints.OPENAPI
    )

    # Registries are built once and only read afterwards
    app.state.shaping = build_shaping_context()
    app.state.mappers = build_mappers()

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[HttpHeaders.ACCEPT, HttpHeaders.CONTENT_TYPE, HttpHeaders.REQUEST_ID],
        expose_headers=[HttpHeaders.PAGINATION, HttpHeaders.LOCATION, HttpHeaders.REQUEST_ID],
    )
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(metrics_endpoint.router, tags=["Metrics"])

    @app.get(ApiEndpoints.HEALTH, tags=["Health"])
    async def health_check():
        """Health check endpoint for readiness/liveness probes."""
        return {
            "status": "healthy",
            "application": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT
        }

    @app.get(ApiEndpoints.ROOT, tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "application": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": ApiEndpoints.DOCS,
            "health": ApiEndpoints.HEALTH,
            "api": settings.API_PREFIX,
            "media_types": app.state.shaping.composer.media_types
        }

    setup_tracing(app, engine)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "library_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
