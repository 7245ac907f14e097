"""
Transport abstraction layer.
"""

from crosstab.transport.base import (
    InboundHandler,
    Transport,
    TransportClosedError,
    TransportError,
    TransportHandle,
)
from crosstab.transport.local import LocalHandle, LocalTransport
from crosstab.transport.router import TransportRouter, get_transport_router

__all__ = [
    "InboundHandler",
    "Transport",
    "TransportHandle",
    "TransportError",
    "TransportClosedError",
    "LocalTransport",
    "LocalHandle",
    "TransportRouter",
    "get_transport_router",
]
