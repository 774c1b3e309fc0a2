"""Request and response schemas."""

from cadence.schemas.queue import (
    PlaybackStateResponse,
    PlaybackStateUpdate,
    QueueAddMultipleRequest,
    QueueAddRequest,
    QueueItemCreatedResponse,
    QueueItemResponse,
    QueueItemsResponse,
    QueueReorderRequest,
    QueueResponse,
)
from cadence.schemas.track import TrackDetailResponse, TrackListResponse, TrackResponse

__all__ = [
    "TrackResponse",
    "TrackListResponse",
    "TrackDetailResponse",
    "QueueItemResponse",
    "QueueAddRequest",
    "QueueAddMultipleRequest",
    "QueueReorderRequest",
    "PlaybackStateUpdate",
    "QueueResponse",
    "QueueItemCreatedResponse",
    "QueueItemsResponse",
    "PlaybackStateResponse",
]
