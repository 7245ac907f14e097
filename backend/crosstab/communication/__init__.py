"""
Communication module for cross-context messaging.
"""

from crosstab.communication.errors import (
    BroadcastError,
    CloseError,
    CrossTabCommunicationError,
    HistoryError,
    InitializationError,
    MessageHandlingError,
    SendError,
)
from crosstab.communication.history import HistoryEntry, HistoryStore
from crosstab.communication.manager import CrossTabCommunicationManager, MessageCallback

__all__ = [
    "CrossTabCommunicationManager",
    "MessageCallback",
    "HistoryStore",
    "HistoryEntry",
    "CrossTabCommunicationError",
    "InitializationError",
    "SendError",
    "BroadcastError",
    "HistoryError",
    "MessageHandlingError",
    "CloseError",
]
