"""
Pydantic schemas for API request/response validation.
"""

from crosstab.schemas.common import ErrorResponse, SuccessResponse
from crosstab.schemas.channel import (
    BroadcastSend,
    ChannelCreate,
    ChannelResponse,
    HistoryResponse,
    InboxResponse,
    MessageSend,
)

__all__ = [
    "SuccessResponse",
    "ErrorResponse",
    "ChannelCreate",
    "ChannelResponse",
    "MessageSend",
    "BroadcastSend",
    "HistoryResponse",
    "InboxResponse",
]
