"""Queue schemas for API validation."""

from cadence.schemas.track import CamelModel, TrackResponse
from datetime import datetime
from pydantic import Field
from typing import Literal


class QueueItemResponse(CamelModel):
    """One slot of a user's queue as shown to clients.

    ``id`` is ``"<trackId>-<position>"`` and changes whenever the slot moves.
    ``added_at`` is stamped when the item is formatted, not when it was queued.
    """

    id: str
    track: TrackResponse
    position: int = Field(ge=0)
    added_at: datetime


class QueueAddRequest(CamelModel):
    """Request to add one track to the queue."""

    track_id: int = Field(gt=0)
    position: str | None = None  # "next" or "end"
    index: int | None = None  # explicit slot, wins over position


class QueueAddMultipleRequest(CamelModel):
    """Request to add several tracks at once."""

    track_ids: list[int] = Field(min_length=1)
    position: str | None = None


class QueueReorderRequest(CamelModel):
    """Request to move a queue item."""

    item_id: str = Field(min_length=1)
    new_position: int = Field(ge=0)


class PlaybackStateUpdate(CamelModel):
    """Schema for updating the cursor and playback flags."""

    current_index: int | None = None
    is_playing: bool | None = None
    shuffle: bool | None = None
    repeat: Literal["off", "all", "one"] | None = None


class QueueResponse(CamelModel):
    """Schema for complete queue response."""

    ok: bool = True
    items: list[QueueItemResponse]
    current_index: int = -1


class QueueItemCreatedResponse(CamelModel):
    ok: bool = True
    item: QueueItemResponse


class QueueItemsResponse(CamelModel):
    ok: bool = True
    items: list[QueueItemResponse]


class PlaybackStateResponse(QueueResponse):
    """Queue plus playback flags."""

    is_playing: bool = False
    shuffle: bool = False
    repeat: str = "off"
