"""OpenTelemetry tracing setup (OTLP over HTTP)."""

from src.config import (
    APP_ENV,
    OTEL_EXPORTER_OTLP_ENDPOINT,
    OTEL_SERVICE_NAME,
    TRACING_ENABLED,
)
from src.utils.logger import get_logger

logger = get_logger("vending_notifications.tracing")
_initialized = False
_tracer_provider = None


def _build_resource():
    """Build Resource with service identity."""
    from opentelemetry.sdk.resources import Resource

    return Resource.create(
        {
            "service.name": OTEL_SERVICE_NAME,
            "service.version": "0.1.0",
            "deployment.environment": APP_ENV,
        }
    )


def init_tracing() -> None:
    """Install the SDK tracer provider with a batch OTLP exporter (call once at startup).

    Does nothing unless TRACING_ENABLED; spans then go to the API's no-op tracer.
    """
    global _initialized, _tracer_provider
    if _initialized or not TRACING_ENABLED:
        return

    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    provider = TracerProvider(resource=_build_resource())
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=OTEL_EXPORTER_OTLP_ENDPOINT)))
    trace.set_tracer_provider(provider)
    _tracer_provider = provider
    _initialized = True
    logger.info("tracing.initialized", endpoint=OTEL_EXPORTER_OTLP_ENDPOINT)


def get_tracer():
    """Return the OpenTelemetry tracer (no-op until init_tracing has run)."""
    from opentelemetry import trace

    return trace.get_tracer("vending-notifications", "0.1.0")


def shutdown_tracing() -> None:
    """Flush and shutdown the tracer provider so spans are exported before process exit."""
    global _initialized, _tracer_provider
    if _tracer_provider is None:
        return
    _tracer_provider.force_flush(timeout_millis=5000)
    _tracer_provider.shutdown()
    _tracer_provider = None
    _initialized = False
