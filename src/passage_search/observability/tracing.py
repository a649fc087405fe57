"""OpenTelemetry spans around search and replace operations."""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import SpanKind, Status, StatusCode

from passage_search.observability.context import bind_span, restore_trace_context


if TYPE_CHECKING:
    from collections.abc import Generator

    from opentelemetry.trace import Span, Tracer

    from passage_search.config import Settings

logger = logging.getLogger(__name__)

# Module-level tracer storage
_tracer_holder: dict[str, Tracer | None] = {"tracer": None}


def init_tracing(
    service_name: str = "passage-search",
    resource_attributes: dict[str, str] | None = None,
) -> TracerProvider:
    """Install an SDK tracer provider and cache a tracer for this package."""
    attributes = {"service.name": service_name}
    if resource_attributes:
        attributes.update(resource_attributes)
    provider = TracerProvider(resource=Resource.create(attributes))
    trace.set_tracer_provider(provider)
    _tracer_holder["tracer"] = provider.get_tracer(__name__)
    logger.info("Tracing initialized for service: %s", service_name)
    return provider


def init_tracing_from_settings(settings: Settings) -> TracerProvider | None:
    """Initialize tracing under ``settings.service_name`` when tracing is enabled."""
    if not settings.tracing_enabled:
        logger.info("Tracing disabled by settings")
        return None
    return init_tracing(service_name=settings.service_name)


def get_tracer() -> Tracer:
    """Get the configured tracer, falling back to the global provider."""
    if _tracer_holder["tracer"] is None:
        _tracer_holder["tracer"] = trace.get_tracer(__name__)
    return _tracer_holder["tracer"]  # type: ignore[return-value]


def reset_tracer() -> None:
    """Forget the cached tracer so the next call picks up the global provider."""
    _tracer_holder["tracer"] = None


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
    *,
    enabled: bool = True,
) -> Generator[Span, None, None]:
    """Create a span and bind it to the log trace context.

    With ``enabled`` false a non-recording span is yielded, so callers can
    set attributes unconditionally.
    """
    if not enabled:
        yield trace.INVALID_SPAN
        return

    tracer = get_tracer()
    with tracer.start_as_current_span(name, kind=kind, record_exception=False, set_status_on_exception=False) as span:
        if attributes:
            span.set_attributes(attributes)
        previous = bind_span(span, operation=name)
        try:
            yield span
        except Exception as exc:
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            span.record_exception(exc)
            raise
        finally:
            restore_trace_context(previous)
