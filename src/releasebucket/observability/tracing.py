"""OpenTelemetry setup for gsutil invocation spans.

The only spans this library emits come from releasebucket.storage.tracing,
one per gsutil run. This module decides whether they are recorded and where
they go.

Environment Variables:
    RELEASEBUCKET_OTEL_ENABLED: "1" turns span emission on (default: off)
    RELEASEBUCKET_REQUIRE_OTEL: "1" makes a failed setup raise TracingConfigError
    RELEASEBUCKET_OTEL_EXPORTER: "otlp", "console" or "memory" (default: "otlp").
        The OTLP exporter reads its endpoint from the standard
        OTEL_EXPORTER_OTLP_ENDPOINT variable. "memory" keeps spans in
        process for tests.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from opentelemetry.sdk.trace import ReadableSpan, TracerProvider

logger = logging.getLogger(__name__)

RELEASEBUCKET_OTEL_ENABLED_ENV = "RELEASEBUCKET_OTEL_ENABLED"
RELEASEBUCKET_REQUIRE_OTEL_ENV = "RELEASEBUCKET_REQUIRE_OTEL"
RELEASEBUCKET_OTEL_EXPORTER_ENV = "RELEASEBUCKET_OTEL_EXPORTER"

EXPORTERS = ("otlp", "console", "memory")

_TRUTHY = ("1", "true", "yes")

# The global TracerProvider can be installed once per process.
_provider: TracerProvider | None = None
_memory_exporter: Any = None


class TracingConfigError(Exception):
    """Raised when tracing is required but cannot be set up."""

    pass


def _flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def is_tracing_enabled() -> bool:
    """Return True if gsutil invocations should emit spans."""
    return _flag(RELEASEBUCKET_OTEL_ENABLED_ENV)


@dataclass(frozen=True)
class TracingSettings:
    """Tracing settings read from the environment."""

    enabled: bool
    required: bool
    exporter: str

    @classmethod
    def from_env(cls) -> TracingSettings:
        exporter = os.environ.get(RELEASEBUCKET_OTEL_EXPORTER_ENV, "").strip().lower() or "otlp"
        return cls(
            enabled=is_tracing_enabled(),
            required=_flag(RELEASEBUCKET_REQUIRE_OTEL_ENV),
            exporter=exporter,
        )


def _span_processor(exporter: str) -> Any:
    """Build the span processor for an exporter name."""
    global _memory_exporter

    from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor

    if exporter == "memory":
        from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

        _memory_exporter = InMemorySpanExporter()
        return SimpleSpanProcessor(_memory_exporter)

    if exporter == "console":
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter

        return SimpleSpanProcessor(ConsoleSpanExporter())

    if exporter == "otlp":
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        return BatchSpanProcessor(OTLPSpanExporter())

    raise ValueError(f"Unknown exporter {exporter!r}; expected one of {', '.join(EXPORTERS)}")


def configure_tracing(settings: TracingSettings | None = None) -> bool:
    """Install a TracerProvider for gsutil spans.

    Safe to call more than once; the first successful call wins.

    Returns:
        True if spans will be recorded, False if tracing is off or setup failed.

    Raises:
        TracingConfigError: If setup fails and RELEASEBUCKET_REQUIRE_OTEL=1.
    """
    global _provider

    settings = settings if settings is not None else TracingSettings.from_env()
    if not settings.enabled:
        logger.debug("gsutil tracing disabled")
        return False

    if _provider is not None:
        return True

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider

        provider = TracerProvider(resource=Resource.create({"service.name": "releasebucket"}))
        provider.add_span_processor(_span_processor(settings.exporter))
        trace.set_tracer_provider(provider)
    except Exception as e:
        logger.error("Failed to configure gsutil tracing: %s", e)
        if settings.required:
            raise TracingConfigError(f"Tracing required but setup failed: {e}") from e
        return False

    _provider = provider
    logger.info("gsutil tracing configured: exporter=%s", settings.exporter)
    return True


def captured_spans() -> list[ReadableSpan]:
    """Return spans held by the "memory" exporter, oldest first."""
    if _memory_exporter is None:
        return []
    return list(_memory_exporter.get_finished_spans())


def clear_captured_spans() -> None:
    """Drop spans held by the "memory" exporter."""
    if _memory_exporter is not None:
        _memory_exporter.clear()
