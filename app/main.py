"""
Venture Portfolio API — Application entry-point.

Initializes the FastAPI application, registers middleware, exception handlers,
routers, and manages the application lifecycle (DB table creation on startup).
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.openapi.docs import get_redoc_html
from sqlalchemy import text

from app.api.v1.api import api_router
from app.core.cache import cache
from app.core.config import settings
from app.core.exceptions import add_exception_handlers
from app.core.logging import setup_logging
from app.core.resilience import db_circuit_breaker
from app.db.session import AsyncSessionLocal, engine, init_db
from app.middleware import RequestIDMiddleware, RequestTimingMiddleware

setup_logging()
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: create tables, retrying with exponential back-off.  If the
    database stays unreachable the app still starts, in degraded mode
    (``/health`` reports ``database: false``).

    Shutdown: dispose of the connection pool.
    """
    try:
        await init_db()
    except Exception as exc:
        logger.error(
            "Could not initialise the database after %d attempts. Starting in "
            "DEGRADED mode; database-backed endpoints will fail until it is "
            "reachable. Last error: %s",
            settings.DB_CONNECT_RETRIES,
            exc,
        )

    yield

    logger.info("Shutting down — disposing connection pool")
    await engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=VERSION,
    description=(
        "Venture portfolio management with password-protected investor share "
        "links, plus a third-party vendor risk catalog."
    ),
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    redoc_url=None,
    lifespan=lifespan,
)


# Default cdn.redoc.ly bundle is blocked by Chrome ORB; unpkg serves it with CORS headers.
@app.get("/redoc", include_in_schema=False)
async def custom_redoc_html():
    return get_redoc_html(
        openapi_url=app.openapi_url or f"{settings.API_V1_STR}/openapi.json",
        title=f"{settings.PROJECT_NAME} — ReDoc",
        redoc_js_url="https://unpkg.com/redoc@latest/bundles/redoc.standalone.js",
    )


# ── Middleware (last added = outermost) ──
app.add_middleware(GZipMiddleware, minimum_size=500)
app.add_middleware(RequestTimingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Liveness / readiness probe.

    Runs ``SELECT 1`` against the database and reports circuit breaker state
    and cache statistics alongside it.
    """
    db_healthy = True
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except Exception:
        logger.warning("Health check: database unreachable", exc_info=True)
        db_healthy = False

    return {
        "status": "ok" if db_healthy else "degraded",
        "version": VERSION,
        "database": db_healthy,
        "circuit_breaker": db_circuit_breaker.get_status(),
        "cache": cache.get_stats(),
    }
