"""Request ID management for request correlation.

The ID is kept in a ContextVar so it follows the request across awaits,
including the forwarded call from the intake handler.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Current request ID, or "no-request-id" outside a request."""
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)
