"""
Cross-tab communication manager.
"""

from __future__ import annotations

import copy
import logging
import random
import threading
from typing import Any, Callable, Optional

from crosstab.communication.errors import (
    BroadcastError,
    CloseError,
    HistoryError,
    InitializationError,
    MessageHandlingError,
    SendError,
)
from crosstab.communication.history import HistoryEntry, HistoryStore
from crosstab.config import get_settings
from crosstab.transport import Transport, TransportHandle, get_transport_router


logger = logging.getLogger(__name__)

MessageCallback = Callable[[Any], None]

# Digits of a base-20 number.
_CHANNEL_NAME_ALPHABET = "0123456789abcdefghij"


class CrossTabCommunicationManager:
    """
    Manages communication between independent contexts sharing a transport.

    Each manager listens on two channels: its own channel, addressed by
    `channel_id`, and the global channel every manager opens. Messages from
    either are passed to the single registered callback. Messages this
    manager sends or broadcasts are kept in its history; received messages
    are not.
    """

    def __init__(self, channel_id: Optional[str] = None, transport: Optional[Transport] = None):
        """
        Create a manager and open its channels.

        Args:
            channel_id: Private channel name. A random one is generated if empty.
            transport: Transport to open channels on; defaults to the configured backend.

        Raises:
            InitializationError: If the transport is unavailable, the channel id
                is the global channel id, or either channel could not be opened.
        """
        settings = get_settings()

        self.channel_id: str = channel_id or self.generate_random_channel_name(settings.channel_name_length)
        self.global_channel_id: str = settings.global_scope_id

        if self.channel_id == self.global_channel_id:
            raise InitializationError(f"Channel id '{self.channel_id}' is reserved for broadcasts")

        self._storage = HistoryStore()
        self._callback: Optional[MessageCallback] = None
        self._lock = threading.Lock()
        self._closed = False

        if transport is None:
            try:
                transport = get_transport_router().get_transport()
            except Exception as exc:
                logger.error(f"Error resolving transport: {exc}")
                raise InitializationError("Failed to initialize channels", exc) from exc

        self._message_channel: TransportHandle = self._open(transport, self.channel_id)
        try:
            self._global_channel: TransportHandle = self._open(transport, self.global_channel_id)
        except InitializationError:
            try:
                self._message_channel.close()
            except Exception as exc:
                logger.error(f"Error closing channel '{self.channel_id}' after failed init: {exc}")
            raise

        self._bind_handlers()
        logger.debug(f"Opened channel '{self.channel_id}' on {transport.transport_name} transport")

    @staticmethod
    def _open(transport: Transport, name: str) -> TransportHandle:
        try:
            return transport.open(name)
        except Exception as exc:
            logger.error(f"Error opening channel '{name}': {exc}")
            raise InitializationError("Failed to initialize channels", exc) from exc

    def _bind_handlers(self):
        self._message_channel.set_inbound_handler(self._handle_message)
        self._global_channel.set_inbound_handler(self._handle_message)

    def _handle_message(self, message: Any):
        """Pass an inbound message from either channel to the callback."""
        with self._lock:
            callback = self._callback

        if callback is None:
            logger.debug(f"No callback registered on '{self.channel_id}', dropping message")
            return

        try:
            callback(message)
        except Exception as exc:
            logger.error(f"Error handling message on '{self.channel_id}': {exc}", exc_info=True)
            raise MessageHandlingError("Error handling message", exc) from exc

    @property
    def closed(self) -> bool:
        return self._closed

    def register_callback(self, callback: Optional[MessageCallback]):
        """
        Set the callback invoked for every received message.

        Replaces any previously registered callback; only one is ever active.
        """
        with self._lock:
            self._callback = callback

    def send_message(self, message: Any, store_in_history: bool = True):
        """
        Send a message to every other manager on this channel.

        Args:
            message: Payload to send
            store_in_history: Whether to record the message once it is sent

        Raises:
            SendError: If the transport rejected the message.
        """
        try:
            record = copy.deepcopy(message) if store_in_history else None
            self._message_channel.send(message)
        except Exception as exc:
            logger.error(f"Error sending message on '{self.channel_id}': {exc}")
            raise SendError("Error sending message", exc) from exc

        if store_in_history:
            self._storage.append(self._message_channel.name, record)

    def broadcast(self, message: Any):
        """
        Send a message to every manager on the global channel.

        Broadcasts are always recorded in history.

        Raises:
            BroadcastError: If the transport rejected the message.
        """
        try:
            record = copy.deepcopy(message)
            self._global_channel.send(message)
        except Exception as exc:
            logger.error(f"Error broadcasting message from '{self.channel_id}': {exc}")
            raise BroadcastError("Error broadcasting message", exc) from exc

        self._storage.append(self._global_channel.name, record)

    def get_history(self, include_global: bool = False) -> list[HistoryEntry]:
        """
        Get the messages this manager has sent.

        Args:
            include_global: Also return broadcast history as a second entry

        Returns:
            [channel messages] or [channel messages, broadcast messages]
        """
        try:
            result = [self._storage.get(self._message_channel.name)]
            if include_global:
                result.append(self._storage.get(self._global_channel.name))
            return result
        except Exception as exc:
            logger.error(f"Error getting history for '{self.channel_id}': {exc}", exc_info=True)
            raise HistoryError("Error getting history", exc) from exc

    def close(self):
        """
        Close both channels. Further sends and broadcasts fail.

        If a channel fails to close the manager stays open and close() can be
        called again; channels that did close are not closed twice.

        Raises:
            CloseError: If either channel failed to close.
        """
        if self._closed:
            return

        error: Optional[Exception] = None
        for channel in (self._message_channel, self._global_channel):
            if channel.closed:
                continue
            try:
                channel.close()
            except Exception as exc:
                logger.error(f"Error closing channel '{channel.name}': {exc}")
                error = error or exc

        if error is not None:
            raise CloseError("Error closing channel", error) from error
        self._closed = True

    def __enter__(self) -> CrossTabCommunicationManager:
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self) -> str:
        return f"CrossTabCommunicationManager(channel_id={self.channel_id!r}, closed={self._closed})"

    @staticmethod
    def generate_random_channel_name(length: int = 6) -> str:
        """
        Generate a random channel name.

        Not suitable where uniqueness matters: two managers may collide and
        then share a channel. Pass an explicit channel_id instead.
        """
        if length < 1:
            raise ValueError(f"length must be at least 1, got {length}")
        return "".join(random.choices(_CHANNEL_NAME_ALPHABET, k=length))
