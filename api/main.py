"""Bookstore API — FastAPI entry point.

Registers middleware, exception handlers, routers, and lifecycle hooks.
Each vertical adds its own router under /api/{Resource}.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.middleware import RequestContextMiddleware
from core.auth.passwords import get_password_hasher
from core.config import check_secrets, settings
from core.database import close_db, get_session_context, init_db
from core.logger import setup_logging
from verticals.accounts.credentials import ensure_seed_user
from verticals.accounts.repository import UserRepository

logger = structlog.get_logger(__name__)

VERSION = "1.0.0"


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    setup_logging(settings.app.log_level, settings.app.log_format)
    logger.info("Starting Bookstore API", version=VERSION)
    for warning in check_secrets(settings):
        logger.warning(warning)

    try:
        await init_db()
        async with get_session_context() as session:
            await ensure_seed_user(
                UserRepository(session), get_password_hasher(), settings.auth
            )
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down Bookstore API")
    await close_db()


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Bookstore API",
    description="Book catalog CRUD with JWT bearer authentication",
    version=VERSION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.app.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request id + access log
app.add_middleware(RequestContextMiddleware)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed payloads as 400 rather than FastAPI's default 422."""
    logger.warning("Request validation failed", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Last-resort handler for errors that escaped the routers."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    detail = "Internal server error"
    if settings.app.debug:
        detail = f"{detail}: {exc}"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
    )


# ---------------------------------------------------------------------------
# Routers — verticals register here
# ---------------------------------------------------------------------------

from verticals.accounts.router import router as auth_router  # noqa: E402
from verticals.bookstore.router import router as book_router  # noqa: E402

app.include_router(book_router, prefix="/api/Book", tags=["Book"])
app.include_router(auth_router, prefix="/api/Auth", tags=["Auth"])


# ---------------------------------------------------------------------------
# Health & root
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    return {"status": "healthy", "version": VERSION}


@app.get("/")
async def root():
    return {
        "name": "Bookstore API",
        "version": VERSION,
        "docs": "/docs",
        "resources": ["Book", "Auth"],
    }
