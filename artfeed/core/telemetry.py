"""
Telemetry configuration (Metrics & Tracing).
Sets up Prometheus instrumentation and OpenTelemetry.
The feed service opens its own spans through the global tracer provider.
"""
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_fastapi_instrumentator import Instrumentator

from artfeed.config import Settings, get_settings

UNMETERED_HANDLERS = ["/metrics", "/health", "/health/ready"]


def _setup_metrics(app: FastAPI) -> None:
    """Request metrics exposed on /metrics."""
    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_respect_env_var=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=UNMETERED_HANDLERS,
        env_var_name="ENABLE_METRICS",
        inprogress_name="artfeed_inprogress",
        inprogress_labels=True,
    )
    instrumentator.instrument(app).expose(app, include_in_schema=False)


def _setup_tracing(app: FastAPI, settings: Settings) -> None:
    """OTLP trace export; spans from FeedService join the request trace."""
    resource = Resource.create(attributes={
        "service.name": settings.APP_NAME,
        "service.version": settings.APP_VERSION,
        "deployment.environment": "development" if settings.DEBUG else "production",
    })

    provider = TracerProvider(resource=resource)
    # Default endpoint is localhost:4317
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))
    trace.set_tracer_provider(provider)

    FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)


def setup_telemetry(app: FastAPI) -> None:
    """Enable whichever of metrics and tracing the settings ask for."""
    settings = get_settings()

    if settings.ENABLE_PROMETHEUS:
        _setup_metrics(app)

    if settings.ENABLE_OTEL:
        _setup_tracing(app, settings)
