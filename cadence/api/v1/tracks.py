"""Track catalog API endpoints."""

from cadence.core.database import get_async_session
from cadence.core.errors import NotFoundError
from cadence.schemas.track import TrackDetailResponse, TrackListResponse, TrackResponse
from cadence.services.catalog import TrackCatalog
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/tracks", tags=["tracks"])


@router.get("", response_model=TrackListResponse)
async def get_tracks(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    search: str | None = None,
    artist: str | None = None,
    db: AsyncSession = Depends(get_async_session),
):
    """Get catalog tracks with optional filtering."""
    tracks, total = await TrackCatalog(db).search(search=search, artist=artist, skip=skip, limit=limit)
    return TrackListResponse(tracks=[TrackResponse.model_validate(track) for track in tracks], total=total)


@router.get("/{track_id}", response_model=TrackDetailResponse)
async def get_track(
    track_id: int,
    db: AsyncSession = Depends(get_async_session),
):
    """Get a specific track by ID."""
    track = await TrackCatalog(db).find_by_id(track_id)
    if track is None:
        raise NotFoundError("Track not found")
    return TrackDetailResponse(track=TrackResponse.model_validate(track))
