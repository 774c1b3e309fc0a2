"""Track catalog lookups."""

from cadence.core.errors import InternalError
from cadence.core.logging import log_database_operation
from cadence.models.track import Track
from collections.abc import Iterable
from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# Largest value an INTEGER primary key can hold
MAX_TRACK_ID = 2**63 - 1

LIKE_ESCAPE = "\\"


def _storable(track_id: int) -> bool:
    return 0 < track_id <= MAX_TRACK_ID


def _like_pattern(term: str) -> str:
    """``%term%`` with the LIKE wildcards in ``term`` matched literally."""
    for char in (LIKE_ESCAPE, "%", "_"):
        term = term.replace(char, LIKE_ESCAPE + char)
    return f"%{term}%"


class TrackCatalog:
    """Read access to the song catalog."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, track_id: int) -> Track | None:
        """Get a track by id, or None."""
        if not _storable(track_id):
            return None
        try:
            return await self.db.get(Track, track_id)
        except SQLAlchemyError as exc:
            raise InternalError(f"Catalog lookup failed: {exc}") from exc

    async def find_all_by_ids(self, track_ids: Iterable[int]) -> dict[int, Track]:
        """Resolve many ids with one query.

        Returns a mapping keyed by track id; ids that do not exist are absent.
        """
        unique_ids = sorted(track_id for track_id in set(track_ids) if _storable(track_id))
        if not unique_ids:
            return {}

        log_database_operation("SELECT", table="tracks", count=len(unique_ids))
        try:
            result = await self.db.execute(select(Track).where(Track.id.in_(unique_ids)))
        except SQLAlchemyError as exc:
            raise InternalError(f"Catalog lookup failed: {exc}") from exc
        return {track.id: track for track in result.scalars().all()}

    async def search(
        self,
        search: str | None = None,
        artist: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[list[Track], int]:
        """Get tracks with optional filtering and pagination.

        Returns:
            Tuple of (tracks list, total count)
        """
        query = select(Track)

        if search:
            search_term = _like_pattern(search)
            query = query.where(
                or_(
                    Track.title.ilike(search_term, escape=LIKE_ESCAPE),
                    Track.artist.ilike(search_term, escape=LIKE_ESCAPE),
                    Track.album.ilike(search_term, escape=LIKE_ESCAPE),
                )
            )

        if artist:
            query = query.where(Track.artist.ilike(_like_pattern(artist), escape=LIKE_ESCAPE))

        count_query = select(func.count()).select_from(query.subquery())

        try:
            total = (await self.db.execute(count_query)).scalar_one()
            result = await self.db.execute(query.order_by(Track.id).offset(skip).limit(limit))
        except SQLAlchemyError as exc:
            raise InternalError(f"Catalog search failed: {exc}") from exc

        return list(result.scalars().all()), total
