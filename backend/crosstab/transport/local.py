"""
In-process transport with BroadcastChannel-like semantics.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import threading
from typing import Any, Optional

from crosstab.transport.base import (
    InboundHandler,
    Transport,
    TransportClosedError,
    TransportError,
    TransportHandle,
)


logger = logging.getLogger(__name__)


class LocalHandle(TransportHandle):
    """Handle on a LocalTransport channel."""

    def __init__(self, transport: LocalTransport, name: str):
        self._transport = transport
        self._name = name
        self._closed = False
        self._handler: Optional[InboundHandler] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, message: Any) -> None:
        if self._closed:
            raise TransportClosedError(f"Channel '{self._name}' is closed")
        self._transport._post(self, message)

    def set_inbound_handler(self, handler: Optional[InboundHandler]) -> None:
        self._handler = handler

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._handler = None
        self._transport._detach(self)

    def _receive(self, message: Any) -> None:
        handler = self._handler
        if self._closed or handler is None:
            return
        try:
            handler(message)
        except Exception as exc:
            # Keep delivering to the other handles and keep this handler subscribed.
            logger.error(f"Inbound handler failed on channel '{self._name}': {exc}", exc_info=True)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"LocalHandle(name={self._name!r}, {state})"


class LocalTransport(Transport):
    """
    Single-process transport.

    Delivery is scheduled on the running asyncio event loop when there is one,
    so send() returns before any receiver runs. Without a running loop the
    message is delivered inline.
    """

    def __init__(self):
        self._channels: dict[str, list[LocalHandle]] = {}
        self._lock = threading.Lock()

    @property
    def transport_name(self) -> str:
        return "local"

    def open(self, name: str) -> LocalHandle:
        if not isinstance(name, str) or not name:
            raise TransportError(f"Invalid channel name: {name!r}")

        handle = LocalHandle(self, name)
        with self._lock:
            self._channels.setdefault(name, []).append(handle)
        return handle

    def channel_names(self) -> list[str]:
        """Names with at least one open handle."""
        with self._lock:
            return list(self._channels)

    def handle_count(self, name: str) -> int:
        with self._lock:
            return len(self._channels.get(name, []))

    def _detach(self, handle: LocalHandle) -> None:
        with self._lock:
            handles = self._channels.get(handle.name)
            if not handles:
                return
            self._channels[handle.name] = [h for h in handles if h is not handle]
            if not self._channels[handle.name]:
                del self._channels[handle.name]

    def _post(self, sender: LocalHandle, message: Any) -> None:
        try:
            payload = copy.deepcopy(message)
        except Exception as exc:
            raise TransportError(f"Message could not be cloned: {exc}") from exc

        with self._lock:
            receivers = [h for h in self._channels.get(sender.name, []) if h is not sender]

        if not receivers:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            loop.call_soon(self._deliver, receivers, payload)
        else:
            self._deliver(receivers, payload)

    def _deliver(self, receivers: list[LocalHandle], payload: Any) -> None:
        for handle in receivers:
            handle._receive(copy.deepcopy(payload))
