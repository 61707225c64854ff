"""Observability module.

Provides structured logging, metrics, request correlation and health checks.
"""

from .logging_config import configure_logging
from .metrics import (
    recordings_received_total,
    consultations_created_total,
    scoring_runs_total,
    downstream_latency_seconds,
)
from .request_id import (
    REQUEST_ID_HEADER,
    request_id_var,
    get_request_id,
    set_request_id,
    generate_request_id,
)
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    # Metrics
    "recordings_received_total",
    "consultations_created_total",
    "scoring_runs_total",
    "downstream_latency_seconds",
    # Request correlation
    "REQUEST_ID_HEADER",
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    "RequestIDMiddleware",
]
