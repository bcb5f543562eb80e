"""
SkyRoutes Backend - FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       lifespan() configures logging, verifies the dataset and disposes the
       engine on shutdown.
Who:   uvicorn (`uvicorn skyroutes.main:app`), `run()`, and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                     FastAPI App                          │
    │                                                          │
    │  Middleware: Request ID → Logging → GZip → CORS          │
    │                                                          │
    │  Routes:                                                 │
    │  GET /routes               GET /airports/{iata}/routes   │
    │  GET /airports             GET /countries/{c}/routes     │
    │  GET /countries  GET /airlines  GET /stats  GET /health  │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ValidationError→400 │ DatabaseError→500 │ other→500     │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, verify the route_details view and tables
              (aborts startup when something is missing)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from skyroutes import __version__
from skyroutes.config import settings
from skyroutes.database import dispose_engine, verify_schema
from skyroutes.exceptions import DatabaseError, SkyRoutesError, ValidationError
from skyroutes.middleware.logging import RequestLoggingMiddleware
from skyroutes.middleware.request_id import RequestIDMiddleware, request_id_var
from skyroutes.routes import airlines, airports, countries, health, route_search, stats

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # skyroutes.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if settings.log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Set up logging
        2. Verify the dataset schema (DatabaseError propagates and aborts
           startup, the server never serves a broken dataset)
    Shutdown:
        1. Dispose the database engine
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("SkyRoutes Backend %s starting up...", __version__)

    if settings.verify_schema_on_startup:
        try:
            await verify_schema()
        except DatabaseError as e:
            logger.error("Error verifying database structure: %s | Context: %s", e.message, e.context)
            await dispose_engine()
            raise

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Closing database connection...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        ValidationError      → 400 Bad Request
        DatabaseError        → 500 Internal Server Error (generic message)
        SkyRoutesError       → 500 Internal Server Error
        Exception (fallback) → 500 Internal Server Error

    Causes of 500s are logged server-side and never included in the body.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "Internal server error",
                "request_id": rid,
            },
        )

    @app.exception_handler(SkyRoutesError)
    async def handle_app_error(request: Request, exc: SkyRoutesError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "Internal server error",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "Internal server error",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="SkyRoutes API",
        description=(
            "Read-only query API over a flight routes dataset: airlines, airports, "
            "countries, and routes filtered by airline, airport, country and duration."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(route_search.router)
    app.include_router(airports.router)
    app.include_router(countries.router)
    app.include_router(airlines.router)
    app.include_router(stats.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "skyroutes.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
