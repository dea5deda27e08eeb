"""
api/cors.py -- CORS headers and OPTIONS short-circuit.

Starlette's CORSMiddleware only intercepts *preflight* OPTIONS requests (those
carrying Origin and Access-Control-Request-Method) and answers them with a
text body. Browser clients and health probes of this API expect every OPTIONS
request to come back 200 with headers only, so this is a small
@app.middleware("http") instead.

Rules:
  - An Origin on the allow-list is reflected in Access-Control-Allow-Origin.
    Any other Origin gets no Allow-Origin header; the browser enforces the rest.
  - Allow-Methods / Allow-Headers are sent on every response.
  - OPTIONS never reaches routing: empty 200 response, headers only.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable

from fastapi import Request, Response

ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization"

Middleware = Callable[[Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]]


def cors_headers(origin: str | None, allowed_origins: frozenset[str]) -> dict[str, str]:
    """Return the CORS headers for a request from origin."""
    headers = {
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Vary": "Origin",
    }
    if origin and origin in allowed_origins:
        headers["Access-Control-Allow-Origin"] = origin
    return headers


def make_cors_middleware(allowed_origins: Iterable[str]) -> Middleware:
    """Build the middleware coroutine for a fixed origin allow-list.

    Register with:  app.middleware("http")(make_cors_middleware(settings.cors_origins))
    """
    allowed = frozenset(allowed_origins)

    async def cors(request: Request, call_next):
        headers = cors_headers(request.headers.get("Origin"), allowed)
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)
        response = await call_next(request)
        response.headers.update(headers)
        return response

    return cors
