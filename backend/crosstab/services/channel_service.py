"""
Channel service hosting communication managers for HTTP peers.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Optional

from crosstab.communication import CrossTabCommunicationManager
from crosstab.config import get_settings
from crosstab.transport import Transport


logger = logging.getLogger(__name__)


@dataclass
class ChannelRegistry:
    """In-memory table of hosted managers and the messages they received."""

    managers: dict[str, CrossTabCommunicationManager] = field(default_factory=dict)
    inboxes: dict[str, deque] = field(default_factory=dict)
    transport: Optional[Transport] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def close_all(self) -> None:
        with self._lock:
            managers = list(self.managers.values())
            self.managers.clear()
            self.inboxes.clear()
        for manager in managers:
            try:
                manager.close()
            except Exception as exc:
                logger.error(f"Error closing channel '{manager.channel_id}': {exc}")


_registry: Optional[ChannelRegistry] = None


def get_registry() -> ChannelRegistry:
    global _registry
    if _registry is None:
        _registry = ChannelRegistry()
    return _registry


class ChannelService:
    """Service for hosted channel operations."""

    def __init__(self, registry: ChannelRegistry):
        self.registry = registry

    def list(self) -> list[CrossTabCommunicationManager]:
        with self.registry._lock:
            return list(self.registry.managers.values())

    def get(self, channel_id: str) -> Optional[CrossTabCommunicationManager]:
        with self.registry._lock:
            return self.registry.managers.get(channel_id)

    def create(self, channel_id: Optional[str] = None) -> Optional[CrossTabCommunicationManager]:
        """
        Open a manager and start collecting what it receives.

        Returns:
            The new manager, or None if the channel id is already hosted
        """
        if channel_id and self.get(channel_id) is not None:
            return None

        manager = CrossTabCommunicationManager(channel_id, transport=self.registry.transport)
        inbox: deque = deque(maxlen=get_settings().inbox_limit)
        manager.register_callback(inbox.append)

        with self.registry._lock:
            if manager.channel_id in self.registry.managers:
                existing = True
            else:
                existing = False
                self.registry.managers[manager.channel_id] = manager
                self.registry.inboxes[manager.channel_id] = inbox

        if existing:
            manager.close()
            return None

        logger.info(f"Hosting channel '{manager.channel_id}'")
        return manager

    def drain_inbox(self, channel_id: str) -> Optional[list[Any]]:
        """Return and clear the messages received on a hosted channel."""
        with self.registry._lock:
            inbox = self.registry.inboxes.get(channel_id)
            if inbox is None:
                return None
            messages = list(inbox)
            inbox.clear()
        return messages

    def close(self, channel_id: str) -> bool:
        """
        Close a hosted manager and stop hosting it.

        The channel stays hosted when closing raises, so the close can be retried.
        """
        manager = self.get(channel_id)
        if manager is None:
            return False

        logger.info(f"Closing channel '{channel_id}'")
        manager.close()

        with self.registry._lock:
            if self.registry.managers.get(channel_id) is manager:
                del self.registry.managers[channel_id]
                self.registry.inboxes.pop(channel_id, None)
        return True
