"""Observability: structlog configuration and OpenTelemetry tracing."""

from authflow.infrastructure.observability.setup import (
    configure_logging,
    init_observability,
    shutdown_observability,
)
from authflow.infrastructure.observability.structlog_processor import (
    add_trace_context,
    redact_credentials,
)
from authflow.infrastructure.observability.tracing import (
    get_current_trace_id,
    get_tracer,
    traced,
)

__all__ = [
    "add_trace_context",
    "configure_logging",
    "get_current_trace_id",
    "get_tracer",
    "init_observability",
    "redact_credentials",
    "shutdown_observability",
    "traced",
]
