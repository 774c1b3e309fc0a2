"""FastAPI backend for the Cadence playback queue.

Provides REST endpoints for the per-user queue and the track catalog,
plus a websocket channel that pushes queue changes to a user's clients.
"""

import time
from cadence import __version__
from cadence.api.v1 import events_router, queue_router, tracks_router
from cadence.core.config import settings
from cadence.core.database import check_database, close_database, init_database
from cadence.core.errors import register_error_handlers
from cadence.core.logging import setup_logging
from contextlib import asynccontextmanager
from eliot import log_message
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Track startup time for health check
_start_time: float = 0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    global _start_time
    _start_time = time.time()

    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    await init_database()
    log_message(message_type="application_ready", message=f"{settings.APP_NAME} v{__version__} started")

    yield

    await close_database()
    log_message(message_type="application_stopped", message=f"{settings.APP_NAME} shutting down")


app = FastAPI(
    title=settings.APP_NAME,
    description="REST API for per-user playback queues",
    version=__version__,
    lifespan=lifespan,
)

if settings.CORS_ENABLED:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_error_handlers(app)

# Include routers
app.include_router(queue_router, prefix="/api")
app.include_router(tracks_router, prefix="/api")
app.include_router(events_router)


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    try:
        await check_database()
        db_status = "connected"
    except Exception as exc:
        log_message(message_type="health_check_failed", error=str(exc))
        db_status = "error"

    uptime = int(time.time() - _start_time) if _start_time else 0

    return {
        "status": "healthy",
        "version": __version__,
        "database": db_status,
        "uptime_seconds": uptime,
    }


def run():
    """Entry point for running the server."""
    import uvicorn

    uvicorn.run(
        "cadence.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
