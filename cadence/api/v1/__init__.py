"""Version 1 API routers."""

from cadence.api.v1.events import router as events_router
from cadence.api.v1.queue import router as queue_router
from cadence.api.v1.tracks import router as tracks_router

__all__ = ["queue_router", "tracks_router", "events_router"]
