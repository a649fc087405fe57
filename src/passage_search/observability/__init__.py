"""Observability module: structured logging and OpenTelemetry spans."""

from passage_search.observability.context import get_trace_context, set_trace_context, trace_context
from passage_search.observability.logging import (
    JsonFormatter,
    configure_logging,
    configure_logging_from_settings,
)
from passage_search.observability.tracing import (
    create_span,
    get_tracer,
    init_tracing,
    init_tracing_from_settings,
    reset_tracer,
)


__all__ = [
    "JsonFormatter",
    "configure_logging",
    "configure_logging_from_settings",
    "create_span",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "init_tracing_from_settings",
    "reset_tracer",
    "set_trace_context",
    "trace_context",
]
