"""OpenTelemetry tracing integration for gsutil invocations.

Spans carry only the gsutil subcommand and argument shape. Source and
destination paths are never exported: local paths can reveal workstation
layout and bucket paths are not needed for correlation.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Sequence
from typing import Any, TypeVar, cast

from opentelemetry import trace

from releasebucket.observability.tracing import is_tracing_enabled

F = TypeVar("F", bound=Callable[..., Any])


def gsutil_subcommand(args: Sequence[str]) -> str:
    """Return the gsutil subcommand in an argument list (first non-flag token)."""
    for arg in args:
        if not arg.startswith("-"):
            return arg
    return "unknown"


def traced_gsutil_operation(func: F) -> F:
    """Decorator to trace a runner's ``run(args)`` with OpenTelemetry.

    Emits a ``releasebucket.gsutil.<subcommand>`` span when tracing is
    enabled; otherwise calls through untraced.
    """

    @functools.wraps(func)
    def wrapper(self: Any, args: Sequence[str], *rest: Any, **kwargs: Any) -> Any:
        if not is_tracing_enabled():
            return func(self, args, *rest, **kwargs)

        subcommand = gsutil_subcommand(args)
        tracer = trace.get_tracer("releasebucket.gsutil")

        with tracer.start_as_current_span(f"releasebucket.gsutil.{subcommand}") as span:
            span.set_attribute("gsutil.subcommand", subcommand)
            span.set_attribute("gsutil.arg_count", len(args))
            config = getattr(self, "config", None)
            if config is not None:
                span.set_attribute("gsutil.concurrent", config.concurrent_flag in args)

            try:
                return func(self, args, *rest, **kwargs)
            except Exception as e:
                span.set_attribute("error", True)
                span.set_attribute("error.type", type(e).__name__)
                returncode = getattr(e, "returncode", None)
                if returncode is not None:
                    span.set_attribute("gsutil.returncode", returncode)
                raise

    return cast(F, wrapper)
