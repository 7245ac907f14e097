"""
Hosted channel API routes (single-process, no auth).
"""

from fastapi import APIRouter, Depends, HTTPException, status

from crosstab.communication import CrossTabCommunicationManager
from crosstab.schemas.channel import (
    BroadcastSend,
    ChannelCreate,
    ChannelResponse,
    HistoryResponse,
    InboxResponse,
    MessageSend,
)
from crosstab.schemas.common import SuccessResponse
from crosstab.services.channel_service import ChannelRegistry, ChannelService, get_registry


router = APIRouter()


def _to_response(manager: CrossTabCommunicationManager) -> ChannelResponse:
    return ChannelResponse(
        channel_id=manager.channel_id,
        global_channel_id=manager.global_channel_id,
        closed=manager.closed,
    )


def _get_or_404(service: ChannelService, channel_id: str) -> CrossTabCommunicationManager:
    manager = service.get(channel_id)
    if manager is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Channel {channel_id} not found")
    return manager


@router.get("", response_model=list[ChannelResponse])
async def list_channels(registry: ChannelRegistry = Depends(get_registry)):
    service = ChannelService(registry)
    return [_to_response(m) for m in service.list()]


@router.post("", response_model=ChannelResponse, status_code=status.HTTP_201_CREATED)
async def create_channel(
    data: ChannelCreate,
    registry: ChannelRegistry = Depends(get_registry),
):
    service = ChannelService(registry)

    manager = service.create(data.channel_id)
    if manager is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Channel {data.channel_id} already exists")
    return _to_response(manager)


@router.get("/{channel_id}", response_model=ChannelResponse)
async def get_channel(
    channel_id: str,
    registry: ChannelRegistry = Depends(get_registry),
):
    service = ChannelService(registry)
    return _to_response(_get_or_404(service, channel_id))


@router.post("/{channel_id}/messages", response_model=SuccessResponse)
async def send_message(
    channel_id: str,
    data: MessageSend,
    registry: ChannelRegistry = Depends(get_registry),
):
    service = ChannelService(registry)
    manager = _get_or_404(service, channel_id)

    manager.send_message(data.message, store_in_history=data.store_in_history)
    return SuccessResponse(message="Message sent")


@router.post("/{channel_id}/broadcast", response_model=SuccessResponse)
async def broadcast(
    channel_id: str,
    data: BroadcastSend,
    registry: ChannelRegistry = Depends(get_registry),
):
    service = ChannelService(registry)
    manager = _get_or_404(service, channel_id)

    manager.broadcast(data.message)
    return SuccessResponse(message="Message broadcast")


@router.get("/{channel_id}/history", response_model=HistoryResponse)
async def get_history(
    channel_id: str,
    include_global: bool = False,
    registry: ChannelRegistry = Depends(get_registry),
):
    service = ChannelService(registry)
    manager = _get_or_404(service, channel_id)

    return HistoryResponse(channel_id=channel_id, history=manager.get_history(include_global))


@router.get("/{channel_id}/inbox", response_model=InboxResponse)
async def drain_inbox(
    channel_id: str,
    registry: ChannelRegistry = Depends(get_registry),
):
    service = ChannelService(registry)
    messages = service.drain_inbox(channel_id)
    if messages is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Channel {channel_id} not found")
    return InboxResponse(channel_id=channel_id, messages=messages)


@router.delete("/{channel_id}", response_model=SuccessResponse)
async def close_channel(
    channel_id: str,
    registry: ChannelRegistry = Depends(get_registry),
):
    service = ChannelService(registry)

    if not service.close(channel_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Channel {channel_id} not found")
    return SuccessResponse(message="Channel closed")
