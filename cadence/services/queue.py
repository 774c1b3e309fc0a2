"""Queue service for managing each user's playback queue."""

from cadence.core.database import get_async_session
from cadence.core.errors import InvalidInputError, NotFoundError
from cadence.core.locks import UserLocks, user_locks
from cadence.core.logging import log_queue_operation, queue_action
from cadence.models.queue import REPEAT_MODES
from cadence.schemas.queue import PlaybackStateResponse, QueueItemResponse, QueueResponse
from cadence.services import ordering
from cadence.services.catalog import TrackCatalog
from cadence.services.store import QueueStore
from cadence.websocket.manager import EventTypes, broadcast_queue_event
from collections.abc import Sequence
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession


class QueueService:
    """Service for managing playback queues.

    Every mutation holds the user's lock from load to save, validates
    everything before touching the order, and commits once.
    """

    def __init__(self, db: AsyncSession, locks: UserLocks | None = None):
        self.db = db
        self.catalog = TrackCatalog(db)
        self.store = QueueStore(db)
        self.locks = locks or user_locks

    async def format_queue_items(self, order: Sequence[int]) -> list[QueueItemResponse]:
        """Display items for ``order`` using one batched catalog lookup."""
        if not order:
            return []
        tracks = await self.catalog.find_all_by_ids(order)
        return ordering.format_queue_items(order, tracks)

    async def get_queue(self, user_id: str) -> QueueResponse:
        """Get the user's queue, creating an empty one on first access."""
        with queue_action("queue:get", user_id=user_id):
            queue = await self.store.load(user_id)
            items = await self.format_queue_items(queue.order)
            return QueueResponse(items=items, current_index=ordering.current_index(queue.current_position, items))

    async def add_to_queue(
        self,
        user_id: str,
        track_id: int,
        position: str | None = None,
        index: int | None = None,
    ) -> QueueItemResponse:
        """Insert one track and return its display item."""
        async with self.locks.hold(user_id):
            with queue_action("queue:add", user_id=user_id, track_id=track_id, position=position, index=index):
                track = await self.catalog.find_by_id(track_id)
                if track is None:
                    raise NotFoundError(f"Track {track_id} not found")

                queue = await self.store.load(user_id)
                order = queue.order
                at = ordering.insertion_index(len(order), position, index)
                queue.queue_order = ordering.insert_tracks(order, [track_id], at)
                await self.store.save(queue)

                log_queue_operation("add", user_id=user_id, track_id=track_id, index=at, queue_length=len(order) + 1)
                item = ordering.build_queue_item(track_id, at, track)

        await broadcast_queue_event(EventTypes.QUEUE_UPDATED, user_id, {"added": 1, "index": at})
        return item

    async def add_multiple_to_queue(
        self,
        user_id: str,
        track_ids: Sequence[int],
        position: str | None = None,
    ) -> list[QueueItemResponse]:
        """Insert a batch of tracks, all or nothing."""
        if not track_ids:
            raise InvalidInputError("trackIds must be a non-empty list")

        async with self.locks.hold(user_id):
            with queue_action("queue:add_multiple", user_id=user_id, count=len(track_ids), position=position):
                tracks = await self.catalog.find_all_by_ids(track_ids)
                missing = [track_id for track_id in dict.fromkeys(track_ids) if track_id not in tracks]
                if missing:
                    raise NotFoundError(f"Tracks not found: {', '.join(str(track_id) for track_id in missing)}")

                queue = await self.store.load(user_id)
                order = queue.order
                at = ordering.insertion_index(len(order), position)
                queue.queue_order = ordering.insert_tracks(order, track_ids, at)
                await self.store.save(queue)

                log_queue_operation("add_multiple", user_id=user_id, count=len(track_ids), index=at)
                items = [
                    ordering.build_queue_item(track_id, at + offset, tracks[track_id])
                    for offset, track_id in enumerate(track_ids)
                ]

        await broadcast_queue_event(EventTypes.QUEUE_UPDATED, user_id, {"added": len(track_ids), "index": at})
        return items

    async def remove_from_queue(self, user_id: str, item_ids: Sequence[str] | None = None) -> None:
        """Remove the given display ids, or clear the queue when none are given."""
        async with self.locks.hold(user_id):
            with queue_action("queue:remove", user_id=user_id, item_ids=list(item_ids or [])):
                queue = await self.store.load(user_id, create=False)
                if queue is None:
                    return

                if not item_ids:
                    await self._clear(queue)
                    event, data = EventTypes.QUEUE_CLEARED, {}
                else:
                    order = queue.order
                    if not order:
                        return

                    items = await self.format_queue_items(order)
                    positions = ordering.resolve_display_ids(item_ids, order, items)
                    if not positions:
                        raise InvalidInputError("No valid items to remove")

                    remaining = ordering.remove_positions(order, positions)
                    queue.queue_order = remaining
                    queue.current_position = ordering.clamp_cursor(queue.current_position, len(remaining))
                    await self.store.save(queue)

                    removed = sorted(positions)
                    log_queue_operation("remove", user_id=user_id, positions=removed, queue_length=len(remaining))
                    event, data = EventTypes.TRACK_REMOVED, {"removed": removed, "queueLength": len(remaining)}

        await broadcast_queue_event(event, user_id, data)

    async def _clear(self, queue) -> None:
        queue.queue_order = []
        queue.current_track_id = None
        queue.current_position = 0
        await self.store.save(queue)
        log_queue_operation("clear", user_id=queue.user_id)

    async def reorder_queue(self, user_id: str, item_id: str, new_position: int) -> list[QueueItemResponse]:
        """Move the first slot holding the item's track to ``new_position``."""
        if not item_id:
            raise InvalidInputError("itemId and newPosition are required")
        if new_position < 0:
            raise InvalidInputError("newPosition must be a number greater than or equal to 0")

        async with self.locks.hold(user_id):
            with queue_action("queue:reorder", user_id=user_id, item_id=item_id, new_position=new_position):
                queue = await self.store.load(user_id, create=False)
                if queue is None or not queue.order:
                    raise NotFoundError("Queue is empty")

                track_id = ordering.parse_leading_track_id(item_id)
                if track_id is None:
                    raise InvalidInputError(f"Invalid item id: {item_id}")

                order = queue.order
                if track_id not in order:
                    raise NotFoundError("Item not found in queue")

                from_index = order.index(track_id)
                reordered, to_index = ordering.move_track(order, from_index, new_position)
                queue.queue_order = reordered
                queue.current_position = ordering.shift_cursor(queue.current_position, from_index, to_index)
                await self.store.save(queue)

                log_queue_operation("reorder", user_id=user_id, track_id=track_id, from_index=from_index, to_index=to_index)
                items = await self.format_queue_items(reordered)

        await broadcast_queue_event(EventTypes.QUEUE_UPDATED, user_id, {"moved": {"from": from_index, "to": to_index}})
        return items

    async def update_playback_state(
        self,
        user_id: str,
        current_index: int | None = None,
        is_playing: bool | None = None,
        shuffle: bool | None = None,
        repeat: str | None = None,
    ) -> PlaybackStateResponse:
        """Move the cursor and/or change playback flags."""
        if repeat is not None and repeat not in REPEAT_MODES:
            raise InvalidInputError(f"repeat must be one of: {', '.join(REPEAT_MODES)}")

        async with self.locks.hold(user_id):
            with queue_action("queue:state", user_id=user_id, current_index=current_index):
                queue = await self.store.load(user_id)
                order = queue.order
                items = await self.format_queue_items(order)

                if current_index is not None:
                    if not 0 <= current_index < len(order):
                        raise InvalidInputError(f"currentIndex must be between 0 and {len(order) - 1}")
                    current = next((item for item in items if item.position == current_index), None)
                    if current is None:
                        raise InvalidInputError(f"No playable track at index {current_index}")
                    queue.current_position = current_index
                    queue.current_track_id = current.track.id
                if is_playing is not None:
                    queue.is_playing = is_playing
                if shuffle is not None:
                    queue.shuffle = shuffle
                if repeat is not None:
                    queue.repeat = repeat
                await self.store.save(queue)

                log_queue_operation("state", user_id=user_id, current_position=queue.current_position)
                response = PlaybackStateResponse(
                    items=items,
                    current_index=ordering.current_index(queue.current_position, items),
                    is_playing=bool(queue.is_playing),
                    shuffle=bool(queue.shuffle),
                    repeat=queue.repeat,
                )

        await broadcast_queue_event(EventTypes.QUEUE_UPDATED, user_id, {"currentIndex": response.current_index})
        return response


def get_queue_service(db: AsyncSession = Depends(get_async_session)) -> QueueService:
    """Dependency building a QueueService on the request's session."""
    return QueueService(db)
