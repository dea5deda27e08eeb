"""
api/main.py -- FastAPI application factory for Furnishare.

Run with:      uvicorn asgi:app --reload
               python main.py serve

create_app(settings) builds a fully wired application from an explicit
Settings object. It is the only place that turns configuration into live
collaborators; everything a route needs hangs off app.state:

  app.state.settings    -- the Settings the app was built from (read-only)
  app.state.hasher      -- PasswordHasher (bcrypt, fixed rounds)
  app.state.tokens      -- TokenService (signing secret + TTL)
  app.state.user_store  -- UserStore (credential store)
  app.state.catalog     -- CatalogStore (furniture listings)

The stores are opened in lifespan startup and closed on shutdown, so a
TestClient context manager gets fresh connections per test module.

Middleware stack (outermost to innermost):
  1. log_requests -- method, path, status, latency for every request
  2. cors         -- CORS headers; answers every OPTIONS without routing
  3. catch_unhandled -- turns any uncaught exception into the 500 envelope
                     inside cors, so the reply still carries CORS headers
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.cors import make_cors_middleware
from api.models import ErrorResponse, HealthResponse
from api.routes.auth import router as auth_router
from api.routes.furniture import router as furniture_router
from api.routes.profile import router as profile_router
from auth.passwords import PasswordHasher
from auth.store import UserStore
from auth.tokens import TokenService
from catalog.seed import seed_if_empty
from catalog.store import CatalogStore
from core.config import Settings, get_settings
from core.errors import AppError

__version__ = "0.1.0"

logger = logging.getLogger("furnishare.api")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


# ---------------------------------------------------------------------------
# Lifespan -- startup / shutdown
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the stores on startup and close them on shutdown.

    Startup order: credential store, then catalog, then sample data (which
    needs the catalog). A store that cannot connect aborts startup.
    """
    settings: Settings = app.state.settings
    logger.info("Furnishare API starting up (env=%s)", settings.env)
    app.state.user_store = UserStore(settings.database_url)
    app.state.catalog = CatalogStore(settings.database_url)
    logger.info("Database initialized")
    if settings.seed_sample_data:
        seed_if_empty(app.state.catalog)

    yield

    app.state.catalog.close()
    app.state.user_store.close()
    logger.info("Furnishare API shutdown complete")


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application. settings defaults to get_settings()."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Furnishare API",
        description="Accounts, session tokens, and a furniture catalog.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.tokens = TokenService(settings.jwt_secret, settings.token_ttl_seconds)

    # @app.middleware registrations wrap outward: the last one registered is
    # the outermost, so logging sees the final status including CORS replies.
    @app.middleware("http")
    async def catch_unhandled(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
            return _error(500, "An unexpected error occurred.")

    app.middleware("http")(make_cors_middleware(settings.cors_origins))

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %d %.1fms %s",
            request.method,
            request.url.path,
            response.status_code,
            ms,
            request.client.host if request.client else "unknown",
        )
        return response

    app.include_router(auth_router, prefix="/api", tags=["Auth"])
    app.include_router(profile_router, prefix="/api", tags=["Profile"])
    app.include_router(furniture_router, prefix="/api", tags=["Furniture"])

    _register_exception_handlers(app)

    @app.get("/api/health", tags=["Health"])
    def health(request: Request) -> HealthResponse:
        """Return liveness and a database probe. Never requires auth."""
        try:
            request.app.state.user_store.ping()
            database = "ok"
        except Exception:
            logger.warning("Health check: database unreachable", exc_info=True)
            database = "error"
        status = "healthy" if database == "ok" else "degraded"
        return HealthResponse(status=status, version=__version__, components={"app": "ok", "database": database})

    return app


# ---------------------------------------------------------------------------
# Exception handlers
#
# All handlers return the same {"error": "<message>"} envelope so clients
# can parse failures without inspecting the status code first.
# ---------------------------------------------------------------------------


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Routing errors (unknown path, wrong method) in the same envelope."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Unparseable JSON or wrongly-typed fields. Reported as 400, not FastAPI's 422."""
        logger.debug("Request validation failed: %s", exc.errors())
        return _error(400, "Invalid request body")

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Last-resort handler for errors raised outside catch_unhandled.

        Runs in ServerErrorMiddleware, outside cors and log_requests. The
        traceback goes to the log only, never to the response body.
        """
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _error(500, "An unexpected error occurred.")
