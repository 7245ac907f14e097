"""
Per-channel message history.
"""

import threading
from typing import Any


HistoryEntry = list[Any]


class HistoryStore:
    """
    Append-only message history keyed by channel name.

    Insertion order is preserved and nothing is ever evicted.
    """

    def __init__(self):
        self._channels: dict[str, list[Any]] = {}
        self._lock = threading.Lock()

    def append(self, channel: str, message: Any):
        """Record a message for a channel."""
        with self._lock:
            if channel not in self._channels:
                self._channels[channel] = []
            self._channels[channel].append(message)

    def get(self, channel: str) -> HistoryEntry:
        """Get a copy of a channel's messages (empty if none were recorded)."""
        with self._lock:
            return list(self._channels.get(channel, []))

    def channels(self) -> list[str]:
        with self._lock:
            return list(self._channels)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(messages) for messages in self._channels.values())
