"""Pure list transformations behind the playback queue.

A queue is a list of track ids (duplicates allowed) plus an integer cursor.
Nothing in this module touches the database: the service loads the list,
hands it to these functions, and persists whatever comes back.

Display ids are ``"<trackId>-<index>"``. They are derived from position,
so every mutation that shifts a slot also changes its id. Clients holding
ids from an older response are tolerated by :func:`resolve_display_id`.
"""

import re
from cadence.schemas.queue import QueueItemResponse
from cadence.schemas.track import TrackResponse
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

INSERT_NEXT = "next"
INSERT_END = "end"

DISPLAY_ID_PATTERN = re.compile(r"^(\d+)-(\d+)$")
LEADING_TRACK_ID_PATTERN = re.compile(r"^(\d+)-")


def make_display_id(track_id: int, index: int) -> str:
    return f"{track_id}-{index}"


def parse_display_id(display_id: str) -> tuple[int, int] | None:
    """Split ``"<trackId>-<index>"`` into its two integers."""
    match = DISPLAY_ID_PATTERN.match(display_id)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def parse_leading_track_id(display_id: str) -> int | None:
    """Track id in front of the first dash, ignoring whatever follows."""
    match = LEADING_TRACK_ID_PATTERN.match(display_id)
    return int(match.group(1)) if match else None


def insertion_index(length: int, position: str | None = None, index: int | None = None) -> int:
    """Where new tracks go in a queue of ``length`` slots.

    An explicit ``index`` wins and is clamped to ``[0, length]``. Otherwise
    ``"next"`` inserts at the head and anything else appends.
    """
    if index is not None:
        return max(0, min(index, length))
    if position == INSERT_NEXT:
        return 0
    return length


def insert_tracks(order: Sequence[int], track_ids: Iterable[int], at: int) -> list[int]:
    """Splice ``track_ids`` into ``order`` before slot ``at``, keeping their order."""
    return [*order[:at], *track_ids, *order[at:]]


def build_queue_item(track_id: int, index: int, track: Any, added_at: datetime | None = None) -> QueueItemResponse:
    """Project one slot into a display item.

    ``track`` may be a ``Track`` row or a mapping with the same keys.
    """
    return QueueItemResponse(
        id=make_display_id(track_id, index),
        track=TrackResponse.model_validate(track),
        position=index,
        added_at=added_at or datetime.now(timezone.utc),
    )


def format_queue_items(
    order: Sequence[int], tracks_by_id: Mapping[int, Any], added_at: datetime | None = None
) -> list[QueueItemResponse]:
    """Build display items for every slot whose track still resolves.

    Slots whose track is missing from ``tracks_by_id`` are dropped, so the
    result may be shorter than ``order``; positions still refer to ``order``.
    """
    stamp = added_at or datetime.now(timezone.utc)
    items = []
    for index, track_id in enumerate(order):
        track = tracks_by_id.get(track_id)
        if track is None:
            continue
        items.append(build_queue_item(track_id, index, track, stamp))
    return items


def current_index(cursor: int | None, items: Sequence[QueueItemResponse]) -> int:
    """Cursor as reported to clients: -1 unless it sits on a displayed slot."""
    if cursor is None or not any(item.position == cursor for item in items):
        return -1
    return cursor


def resolve_display_id(display_id: str, order: Sequence[int], items: Sequence[QueueItemResponse]) -> int | None:
    """Map a possibly stale display id onto a slot of ``order``.

    Tried in turn:

    1. an item formatted from the current order carries exactly this id;
    2. the id parses as ``trackId-index`` and ``order[index]`` holds that track;
    3. the track occurs somewhere: take its ``index``-th occurrence when
       there are that many, else its first occurrence.

    Returns None when the id names no track in the queue.
    """
    for item in items:
        if item.id == display_id:
            return item.position

    parsed = parse_display_id(display_id)
    if parsed is None:
        return None
    track_id, expected = parsed

    if expected < len(order) and order[expected] == track_id:
        return expected

    occurrences = [index for index, queued in enumerate(order) if queued == track_id]
    if not occurrences:
        return None
    if expected < len(occurrences):
        return occurrences[expected]
    return occurrences[0]


def resolve_display_ids(
    display_ids: Iterable[str], order: Sequence[int], items: Sequence[QueueItemResponse]
) -> set[int]:
    """Resolve every id, dropping the unresolvable ones and duplicates."""
    positions = set()
    for display_id in display_ids:
        position = resolve_display_id(display_id, order, items)
        if position is not None:
            positions.add(position)
    return positions


def remove_positions(order: Sequence[int], positions: Iterable[int]) -> list[int]:
    """Delete the given slots from a copy of ``order``.

    Slots are deleted highest first so earlier deletions never shift the
    indices still to be deleted. Out-of-range positions are ignored.
    """
    remaining = list(order)
    for position in sorted(set(positions), reverse=True):
        if 0 <= position < len(remaining):
            del remaining[position]
    return remaining


def clamp_cursor(cursor: int, length: int) -> int:
    """Pull a cursor that ran past the end back onto the last slot (0 when empty)."""
    if cursor >= length:
        return max(0, length - 1)
    return cursor


def move_track(order: Sequence[int], from_index: int, new_position: int) -> tuple[list[int], int]:
    """Remove the slot at ``from_index`` and reinsert it at ``new_position``.

    ``new_position`` is clamped to the length after removal. Returns the new
    order and the index the slot landed on.
    """
    reordered = list(order)
    track_id = reordered.pop(from_index)
    at = min(new_position, len(reordered))
    reordered.insert(at, track_id)
    return reordered, at


def shift_cursor(cursor: int, from_index: int, to_index: int) -> int:
    """Cursor after moving one slot from ``from_index`` to ``to_index``.

    The cursor keeps pointing at the same logical slot: it follows the
    moved slot, or steps by one when the move crossed it.
    """
    if cursor == from_index:
        return to_index
    if from_index < cursor <= to_index:
        return cursor - 1
    if to_index <= cursor < from_index:
        return cursor + 1
    return cursor
