"""
Errors raised by the communication manager.
"""

from typing import Optional


class CrossTabCommunicationError(Exception):
    """
    Base error for manager operations.

    `category` is a stable tag callers can branch on; `cause` keeps the
    underlying transport or callback failure.
    """

    category: str = "communication"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class InitializationError(CrossTabCommunicationError):
    """A channel could not be opened while constructing the manager."""

    category = "initialization"


class SendError(CrossTabCommunicationError):
    category = "send"


class BroadcastError(CrossTabCommunicationError):
    category = "broadcast"


class HistoryError(CrossTabCommunicationError):
    category = "history"


class MessageHandlingError(CrossTabCommunicationError):
    """The registered callback raised while handling an inbound message."""

    category = "message_handling"


class CloseError(CrossTabCommunicationError):
    category = "close"
