"""DevConnect API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DevConnectError → its JSON envelope
    - CORS configured from settings (not hardcoded)
    - Database initialized and schema created on startup via lifespan
    - Every request gets a request id (x-request-id in and out) bound to its logs

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static files mounted last so /api/* always wins
"""

import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

import devconnect.models  # noqa: F401  (populate Base.metadata)
from devconnect.api.error_handlers import register_error_handlers
from devconnect.api.routes import auth, health, post, profile, users
from devconnect.config import get_settings
from devconnect.infrastructure.database import init_db
from devconnect.infrastructure.observability import (
    bind_request, clear_request, setup_logging,
)

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.create_schema()
    logger.info("DevConnect API started")
    yield
    logger.info("DevConnect API shutting down")
    await manager.dispose()


app = FastAPI(
    title="DevConnect API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Bind request id/method/path for logging and time the request."""
    request_id = bind_request(
        request.method, request.url.path, request.headers.get(REQUEST_ID_HEADER),
    )
    started = time.perf_counter()
    try:
        response = await call_next(request)
        if request.url.path.startswith("/api/"):
            logger.info(
                f"{request.method} {request.url.path} {response.status_code}",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 1),
                },
            )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        clear_request()


app.include_router(health.router)
app.include_router(users.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(post.router)

register_error_handlers(app)

# Frontend build, when present
if os.path.isdir("public"):
    app.mount("/", StaticFiles(directory="public", html=True), name="static")
