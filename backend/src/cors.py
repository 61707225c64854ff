"""CORS headers for the webhook endpoints.

The webhooks answer every OPTIONS themselves (bare or a full browser
preflight) with a fixed header set, and attach the same headers to every JSON
response. The rest of the API goes through Starlette's CORSMiddleware.
"""

from typing import Any, Iterable

from fastapi import Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware as StarletteCORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def preflight_response() -> Response:
    """200 with CORS headers and no body."""
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


def cors_json(content: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def cors_error(message: str, status_code: int = status.HTTP_400_BAD_REQUEST) -> JSONResponse:
    """Error body in the {"error": message} shape used by both webhooks."""
    return cors_json({"error": message}, status_code=status_code)


class CORSMiddleware(StarletteCORSMiddleware):
    """Starlette's CORSMiddleware, bypassed for paths that answer CORS themselves.

    Browser preflights (OPTIONS with Origin and Access-Control-Request-Method)
    to an exempt path reach its route handler, and responses from those paths
    keep the fixed CORS_HEADERS.
    """

    def __init__(self, app: ASGIApp, exempt_paths: Iterable[str] = (), **kwargs):
        super().__init__(app, **kwargs)
        self.exempt_paths = frozenset(exempt_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"] in self.exempt_paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
