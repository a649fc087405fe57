"""Trace context carried into log records.

The context holds the active trace/span ids plus the name of the search
operation being run, so every log line emitted while searching or replacing
can be correlated back to the span that produced it.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING
from uuid import uuid4


if TYPE_CHECKING:
    from opentelemetry.trace import Span

trace_context: ContextVar[dict | None] = ContextVar("trace_context", default=None)


def generate_trace_id() -> str:
    """Generate a 32-char hex trace ID."""
    return uuid4().hex


def generate_span_id() -> str:
    """Generate a 16-char hex span ID."""
    return uuid4().hex[:16]


def get_trace_context() -> dict:
    """Get current trace context, creating fresh ids when none is set."""
    ctx = trace_context.get()
    if ctx is None or not ctx.get("trace_id"):
        ctx = {"trace_id": generate_trace_id(), "span_id": generate_span_id()}
        trace_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, **extra: object) -> None:
    """Replace the trace context for the current context."""
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})


def bind_span(span: Span, operation: str | None = None) -> dict:
    """Point the trace context at ``span`` and return the previous context.

    Spans with an invalid context (no tracer provider configured) keep the
    existing trace id and only record the operation name.
    """
    previous = trace_context.get()
    ctx = dict(previous or get_trace_context())
    span_ctx = span.get_span_context()
    if span_ctx.is_valid:
        ctx["trace_id"] = format(span_ctx.trace_id, "032x")
        ctx["span_id"] = format(span_ctx.span_id, "016x")
    if operation:
        ctx["operation"] = operation
    trace_context.set(ctx)
    return previous or {}


def restore_trace_context(previous: dict) -> None:
    """Restore a context captured by ``bind_span``."""
    trace_context.set(previous or None)
