"""Distributed Tracing Configuration.

OpenTelemetry tracing for the HTTP layer and the database. When tracing is
disabled the OpenTelemetry API hands out no-op tracers, so callers can open
spans unconditionally.
"""

import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Tracer

from .config import settings

logger = logging.getLogger(__name__)


def setup_tracing(app=None, engine=None) -> Optional[TracerProvider]:
    """Setup OpenTelemetry tracing.

    Configures:
    - Resource attributes (service name, version, environment)
    - Span exporter (OTLP or Console based on configuration)
    - Instrumentation for the FastAPI app and the SQLAlchemy engine

    Args:
        app: FastAPI application to instrument
        engine: SQLAlchemy AsyncEngine to instrument

    Returns:
        TracerProvider instance if tracing is enabled, None otherwise
    """
    if not settings.TRACING_ENABLED:
        logger.info("Distributed tracing is disabled")
        return None

    resource = Resource.create({
        "service.name": settings.APP_NAME.lower().replace(" ", "-"),
        "service.version": settings.APP_VERSION,
        "deployment.environment": settings.ENVIRONMENT,
    })

    tracer_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(tracer_provider)

    if settings.TRACING_EXPORTER.lower() == 'otlp':
        span_exporter = OTLPSpanExporter(endpoint=settings.TRACING_OTLP_ENDPOINT)
        logger.info(
            "Tracing configured with OTLP exporter",
            extra={'endpoint': settings.TRACING_OTLP_ENDPOINT}
        )
    else:
        span_exporter = ConsoleSpanExporter()
        logger.info("Tracing configured with console exporter")

    tracer_provider.add_span_processor(BatchSpanProcessor(span_exporter))

    if app is not None:
        FastAPIInstrumentor.instrument_app(app, tracer_provider=tracer_provider)
        logger.debug("FastAPI instrumentation enabled")

    if engine is not None:
        SQLAlchemyInstrumentor().instrument(
            engine=engine.sync_engine,
            tracer_provider=tracer_provider
        )
        logger.debug("SQLAlchemy instrumentation enabled")

    logger.info(
        "Distributed tracing initialized",
        extra={
            'exporter': settings.TRACING_EXPORTER,
            'environment': settings.ENVIRONMENT
        }
    )

    return tracer_provider


def get_tracer(name: str) -> Tracer:
    """Get a tracer instance for the given name.

    Args:
        name: Name of the tracer (typically module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)


def get_trace_id() -> Optional[str]:
    """Get the current trace ID as a hex string.

    Returns:
        Trace ID as hex string, or None if no active trace
    """
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        return format(span_context.trace_id, '032x')
    return None


def get_span_id() -> Optional[str]:
    """Get the current span ID as a hex string.

    Returns:
        Span ID as hex string, or None if no active span
    """
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        return format(span_context.span_id, '016x')
    return None
