"""
Note Nexus Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       the lifespan owns logging setup and the database engine.
Who:   uvicorn (uvicorn notenexus.main:app) and the test client.

Lifecycle:
    Startup:
    1. Configure logging
    2. Report missing secrets (the service still starts)
    3. Ping the database once so a bad DATABASE_URL shows up in the log

    Shutdown:
    1. Dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notenexus import __version__
from notenexus.config import settings
from notenexus.database import dispose_engine, ping_database
from notenexus.exceptions import (
    DatabaseError,
    NoteNexusError,
    PaymentGatewayError,
)
from notenexus.middleware.logging import RequestLoggingMiddleware
from notenexus.middleware.request_id import RequestIDMiddleware, request_id_var
from notenexus.routes import auth, bookmarks, classes, health, payments, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: 2024-01-15T12:00:00 [INFO] notenexus.services.payment_service: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("stripe").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Note Nexus Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    if await ping_database():
        logger.info("Database ping succeeded; connection pool ready")
    else:
        logger.error("Database is unreachable. Requests touching storage will fail.")

    logger.info("Note Nexus is running on port: %d", settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Note Nexus Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str) -> dict:
    return {"error": True, "message": message, "requestId": request_id_var.get("")}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy onto `{"error": true, "message": ...}` bodies.

    Each NoteNexusError subclass carries its own status_code; the handlers
    below only differ in what they log. Internal details (SQL, gateway
    messages, stack traces) stay in the server log.
    """

    @app.exception_handler(PaymentGatewayError)
    async def handle_payment_gateway_error(request: Request, exc: PaymentGatewayError):
        logger.error(
            "[%s] Payment gateway error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("An internal error occurred. Please try again later."),
        )

    @app.exception_handler(NoteNexusError)
    async def handle_app_error(request: Request, exc: NoteNexusError):
        """Auth, validation, not-found and conflict errors: the client's to fix."""
        log_level = logging.ERROR if exc.status_code >= 500 else logging.INFO
        logger.log(
            log_level,
            "[%s] %s %s -> %d %s | Context: %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            exc.status_code,
            type(exc).__name__,
            exc.context,
        )
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500, full stack trace in the log only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": True,
                "message": "An unexpected error occurred. Please try again later.",
                "requestId": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Note Nexus API",
        description=(
            "Backend for the Note Nexus course platform: user roles, class review, "
            "bookmarks and paid enrollment."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(classes.router)
    app.include_router(bookmarks.router)
    app.include_router(payments.router)

    return app


app = create_app()
