"""
Channel schemas for API request/response validation.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ChannelCreate(BaseModel):
    """Schema for opening a hosted channel."""

    channel_id: Optional[str] = Field(
        default=None,
        max_length=200,
        description="Private channel name; generated when omitted",
    )


class ChannelResponse(BaseModel):
    """A hosted channel."""

    channel_id: str
    global_channel_id: str
    closed: bool = False


class MessageSend(BaseModel):
    """Schema for sending on a private channel."""

    message: Any = Field(..., description="Opaque message payload")
    store_in_history: bool = Field(default=True, description="Record the message in history")


class BroadcastSend(BaseModel):
    """Schema for broadcasting on the global channel."""

    message: Any = Field(..., description="Opaque message payload")


class HistoryResponse(BaseModel):
    """Sent-message history. The second entry is present only when broadcasts were requested."""

    channel_id: str
    history: list[list[Any]]


class InboxResponse(BaseModel):
    """Messages received since the inbox was last read."""

    channel_id: str
    messages: list[Any] = Field(default_factory=list)
