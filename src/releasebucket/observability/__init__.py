"""releasebucket observability module.

Provides optional OpenTelemetry tracing for gsutil invocations.
"""

from releasebucket.observability.tracing import (
    TracingConfigError,
    TracingSettings,
    configure_tracing,
)

__all__ = ["configure_tracing", "TracingSettings", "TracingConfigError"]
