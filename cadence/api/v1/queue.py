"""Queue API endpoints."""

import json
from cadence.core.auth import get_current_user_id
from cadence.core.logging import log_api_request
from cadence.schemas.queue import (
    PlaybackStateResponse,
    PlaybackStateUpdate,
    QueueAddMultipleRequest,
    QueueAddRequest,
    QueueItemCreatedResponse,
    QueueItemsResponse,
    QueueReorderRequest,
    QueueResponse,
)
from cadence.services.queue import QueueService, get_queue_service
from fastapi import APIRouter, Depends, Request, Response

router = APIRouter(prefix="/queue", tags=["queue"])


async def _item_ids_from_body(request: Request) -> list[str] | None:
    """Read ``itemIds`` from a DELETE body.

    Anything other than a JSON object with a non-empty ``itemIds`` list
    (no body, invalid JSON, wrong type) means "clear the queue".
    """
    body = await request.body()
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    item_ids = payload.get("itemIds", payload.get("item_ids"))
    if not isinstance(item_ids, list) or not item_ids:
        return None
    return [str(item_id) for item_id in item_ids]


@router.get("", response_model=QueueResponse)
async def get_queue(
    user_id: str = Depends(get_current_user_id),
    service: QueueService = Depends(get_queue_service),
):
    """Get the caller's queue and current index."""
    log_api_request("get_queue", user_id=user_id)
    return await service.get_queue(user_id)


@router.post("", status_code=201, response_model=QueueItemCreatedResponse)
async def add_to_queue(
    request: QueueAddRequest,
    user_id: str = Depends(get_current_user_id),
    service: QueueService = Depends(get_queue_service),
):
    """Add one track, next up, at the end, or at an explicit index."""
    log_api_request("add_to_queue", user_id=user_id, track_id=request.track_id)
    item = await service.add_to_queue(user_id, request.track_id, request.position, request.index)
    return QueueItemCreatedResponse(item=item)


@router.post("/multiple", status_code=201, response_model=QueueItemsResponse)
async def add_multiple_to_queue(
    request: QueueAddMultipleRequest,
    user_id: str = Depends(get_current_user_id),
    service: QueueService = Depends(get_queue_service),
):
    """Add several tracks at once, all or nothing."""
    log_api_request("add_multiple_to_queue", user_id=user_id, count=len(request.track_ids))
    items = await service.add_multiple_to_queue(user_id, request.track_ids, request.position)
    return QueueItemsResponse(items=items)


@router.delete("", status_code=204)
async def remove_from_queue(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: QueueService = Depends(get_queue_service),
):
    """Remove items by display id, or clear the queue when none are given."""
    item_ids = await _item_ids_from_body(request)
    log_api_request("remove_from_queue", user_id=user_id, item_ids=item_ids or [])
    await service.remove_from_queue(user_id, item_ids)
    return Response(status_code=204)


@router.put("/reorder", response_model=QueueItemsResponse)
async def reorder_queue(
    request: QueueReorderRequest,
    user_id: str = Depends(get_current_user_id),
    service: QueueService = Depends(get_queue_service),
):
    """Move an item to a new position."""
    log_api_request("reorder_queue", user_id=user_id, item_id=request.item_id, new_position=request.new_position)
    items = await service.reorder_queue(user_id, request.item_id, request.new_position)
    return QueueItemsResponse(items=items)


@router.put("/state", response_model=PlaybackStateResponse)
async def update_playback_state(
    request: PlaybackStateUpdate,
    user_id: str = Depends(get_current_user_id),
    service: QueueService = Depends(get_queue_service),
):
    """Move the cursor or change playback flags."""
    log_api_request("update_playback_state", user_id=user_id)
    return await service.update_playback_state(
        user_id,
        current_index=request.current_index,
        is_playing=request.is_playing,
        shuffle=request.shuffle,
        repeat=request.repeat,
    )
