"""Sales Consultation Analyzer - Main FastAPI Application

This module creates and configures the FastAPI application, including:
- Webhook routers (email intake, consultation creation)
- Dashboard pages
- Middleware (request ID correlation, CORS)
- Exception handlers
- Health and observability endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from config import get_settings
from cors import CORS_HEADERS, CORSMiddleware, cors_error
from infrastructure.storage import StorageError
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router
from intake.router import router as intake_router
from consultations.router import router as consultations_router
from dashboard.router import router as dashboard_router

settings = get_settings()

configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler (startup/shutdown logging)."""
    logger.info("Consultation analyzer starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    yield

    logger.info("Consultation analyzer shutting down...")


app = FastAPI(
    title="Sales Consultation Analyzer",
    description="Ingests recorded sales calls from email and lists them for review",
    version="0.1.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url=None,
    openapi_url="/openapi.json" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan,
)


# =============================================================================
# MIDDLEWARE CONFIGURATION
# =============================================================================

app.add_middleware(RequestIDMiddleware)

# The webhooks answer OPTIONS and set CORS headers themselves
WEBHOOK_PATHS = ("/api/v1/process-email", "/api/v1/process-consultation")

app.add_middleware(
    CORSMiddleware,
    exempt_paths=WEBHOOK_PATHS,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are client errors: 400 {"error": ...}."""
    errors = exc.errors()
    logger.warning(f"Validation error on {request.method} {request.url.path}: {errors}")

    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Request validation failed"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
        headers=CORS_HEADERS,
    )


@app.exception_handler(StorageError)
async def storage_exception_handler(
    request: Request,
    exc: StorageError
) -> JSONResponse:
    """Recording store unusable before a handler ran (bad config, client init)."""
    logger.error(f"Storage unavailable on {request.method} {request.url.path}: {exc}")
    return cors_error(str(exc))


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Database errors outside the webhooks: logged in full, generic message returned."""
    logger.error(
        f"Database error on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "A database error occurred. Please try again later."},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An unexpected error occurred. Please try again later."},
    )


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

# Observability (health, metrics, ready)
app.include_router(observability_router)

# Webhooks and read API
app.include_router(intake_router, prefix="/api/v1")
app.include_router(consultations_router, prefix="/api/v1")

# Dashboard pages
app.include_router(dashboard_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
