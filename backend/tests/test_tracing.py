"""Tests for Distributed Tracing.

Tests for OpenTelemetry tracing configuration and utilities.
"""

from unittest.mock import MagicMock, patch

from library_api.core.config import settings
from library_api.core.tracing import get_span_id, get_trace_id, get_tracer, setup_tracing


class TestTracing:
    """Test suite for tracing functionality"""

    def test_setup_tracing_disabled(self):
        """Test setup_tracing when tracing is disabled"""
        with patch.object(settings, 'TRACING_ENABLED', False):
            assert setup_tracing() is None

    def test_setup_tracing_instruments_app_and_engine(self):
        """Test setup_tracing instruments the app and the database engine"""
        app = MagicMock()
        engine = MagicMock()

        with patch.object(settings, 'TRACING_ENABLED', True), \
                patch.object(settings, 'TRACING_EXPORTER', 'console'), \
                patch('library_api.core.tracing.trace'), \
                patch('library_api.core.tracing.ConsoleSpanExporter'), \
                patch('library_api.core.tracing.BatchSpanProcessor'), \
                patch('library_api.core.tracing.FastAPIInstrumentor') as mock_fastapi, \
                patch('library_api.core.tracing.SQLAlchemyInstrumentor') as mock_sqlalchemy:
            provider = setup_tracing(app, engine)

        assert provider is not None
        mock_fastapi.instrument_app.assert_called_once_with(app, tracer_provider=provider)
        mock_sqlalchemy.return_value.instrument.assert_called_once_with(
            engine=engine.sync_engine,
            tracer_provider=provider
        )

    def test_setup_tracing_otlp_exporter(self):
        """Test setup_tracing uses the OTLP exporter when configured"""
        with patch.object(settings, 'TRACING_ENABLED', True), \
                patch.object(settings, 'TRACING_EXPORTER', 'otlp'), \
                patch('library_api.core.tracing.trace'), \
                patch('library_api.core.tracing.OTLPSpanExporter') as mock_otlp, \
                patch('library_api.core.tracing.BatchSpanProcessor'):
            setup_tracing()

        mock_otlp.assert_called_once_with(endpoint=settings.TRACING_OTLP_ENDPOINT)

    def test_get_tracer(self):
        assert get_tracer(__name__) is not None

    def test_ids_without_active_span(self):
        """Test trace and span ids are None outside a recording span"""
        assert get_trace_id() is None
        assert get_span_id() is None
