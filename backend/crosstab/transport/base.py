"""
Transport base classes and common types.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional


InboundHandler = Callable[[Any], None]


class TransportError(Exception):
    """Raised when the transport rejects an operation."""


class TransportClosedError(TransportError):
    """Raised when sending on a handle that has been closed."""


class TransportHandle(ABC):
    """
    A single open endpoint on a named broadcast scope.

    Messages sent through a handle are delivered to every other handle open on
    the same scope name. A handle never receives its own messages.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Scope name this handle was opened on."""
        pass

    @property
    @abstractmethod
    def closed(self) -> bool:
        """Whether close() has been called."""
        pass

    @abstractmethod
    def send(self, message: Any) -> None:
        """
        Hand a message to the transport for delivery.

        Raises:
            TransportClosedError: If the handle has been closed.
            TransportError: If the message cannot be transferred.
        """
        pass

    @abstractmethod
    def set_inbound_handler(self, handler: Optional[InboundHandler]) -> None:
        """Set the function called for each inbound message, replacing any previous one."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Stop sending and receiving. Calling close() again has no effect."""
        pass


class Transport(ABC):
    """Abstract base class for transport backends."""

    @property
    @abstractmethod
    def transport_name(self) -> str:
        """Backend name identifier."""
        pass

    @abstractmethod
    def open(self, name: str) -> TransportHandle:
        """
        Open a new handle on a named scope.

        Every call returns a distinct handle, even for a name that is already open.

        Raises:
            TransportError: If the scope name is rejected.
        """
        pass
