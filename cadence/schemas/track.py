"""Track schemas for API validation."""

from datetime import datetime
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys, accepting either spelling."""

    class Config:
        """Pydantic config."""

        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class TrackResponse(CamelModel):
    """Schema for track response."""

    id: int
    title: str
    artist: str
    album: str | None = None
    duration: int | None = None
    cover_url: str = ""
    audio_url: str = ""
    youtube_id: str | None = None
    is_example: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TrackListResponse(CamelModel):
    """Schema for a page of catalog tracks."""

    ok: bool = True
    tracks: list[TrackResponse]
    total: int


class TrackDetailResponse(CamelModel):
    """Schema for a single catalog track."""

    ok: bool = True
    track: TrackResponse
