"""
Howl Backend — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn howl.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │ Req ID   │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  /businesses  /reviews  /photos  /health  static /  │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Storage→500 │ *→500│
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Provision the application database role (if DB_ADMIN_URL is set)
    3. Connect and verify the database; a failure aborts startup
    4. Store the Database on app.state for get_db_session

    Shutdown:
    1. Dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from howl import __version__
from howl.config import settings
from howl.database import Database, provision_app_user
from howl.exceptions import NotFoundError, StorageError, ValidationError
from howl.middleware.logging import RequestLoggingMiddleware
from howl.middleware.request_id import RequestIDMiddleware, request_id_var
from howl.routes import businesses, health, photos, reviews

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before anything else logs.
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Provision, connect, serve, dispose.

    The server does not accept requests until the application role exists
    and a connection has been verified. Either failure propagates and
    uvicorn exits.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Howl backend starting up...")

    if settings.db_admin_url:
        await provision_app_user(
            settings.db_admin_url,
            settings.db_app_user,
            settings.db_app_password,
            settings.database_name,
        )
    else:
        logger.info("DB_ADMIN_URL not set; skipping user provisioning")

    database = Database.from_settings(settings)
    try:
        await database.connect()
    except Exception:
        logger.error("Could not connect to the database; refusing to start", exc_info=True)
        await database.dispose()
        raise
    app.state.database = database

    logger.info("Server is running on port %d", settings.api_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Howl backend shutting down...")
    await database.dispose()
    app.state.database = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def not_found_response(request: Request) -> JSONResponse:
    """
    The single 404 responder.

    Used for unmatched URLs, malformed path identifiers, and NotFoundError
    raised by services, so every "absent" answer looks the same.
    """
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return JSONResponse(
        status_code=404,
        content={
            "error": f"Requested resource {url} does not exist",
            "request_id": request_id_var.get(""),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 404 for path params, 400 for bodies
        NotFoundError           → 404 (fallback responder)
        StarletteHTTPException  → 404 fallback, or its own status
        StorageError            → 500, generic message
        Exception (fallback)    → 500, generic message, traceback logged
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=400,
            content={
                "error": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        # A non-integer id in the path names nothing that exists
        if any(tuple(error.get("loc", ()))[:1] == ("path",) for error in exc.errors()):
            return not_found_response(request)
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request to %s", rid, request.url.path)
        return JSONResponse(
            status_code=400,
            content={
                "error": "Request body is not valid JSON",
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.info("[%s] %s", request_id_var.get(""), exc.message)
        return not_found_response(request)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return not_found_response(request)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail), "request_id": request_id_var.get("")},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": SERVER_ERROR_MESSAGE,
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(static_root: Optional[str] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        static_root: Directory served at "/" when it exists. Defaults to
                     settings.static_root.

    Returns: Configured FastAPI instance. The database is attached by the
             lifespan; tests attach their own to app.state.database.
    """
    app = FastAPI(
        title="Howl API",
        description="Business listings with reviews and photos.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.database = None

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(businesses.router)
    app.include_router(reviews.router)
    app.include_router(photos.router)
    app.include_router(health.router)

    # Mounted last so every API route matches first
    static_dir = Path(static_root or settings.static_root)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")

    return app


app = create_app()
