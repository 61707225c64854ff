"""FastAPI middleware for observability.

Provides request ID generation and request logging for all HTTP requests.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .request_id import REQUEST_ID_HEADER, generate_request_id, set_request_id

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to generate and inject request IDs."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with request ID.

        An incoming X-Request-ID (e.g. set by the intake handler on its
        forwarded call) is reused so both legs log under the same ID.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        set_request_id(request_id)

        start_time = time.time()
        logger.info(f"{request.method} {request.url.path}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed: {str(e)}",
                extra={"duration_ms": round(duration_ms, 2)},
                exc_info=True
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Request completed: {response.status_code}",
            extra={
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            }
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
