"""
Transport router for backend selection.
"""

from typing import Callable, Optional

from crosstab.config import get_settings
from crosstab.transport.base import Transport
from crosstab.transport.local import LocalTransport


TransportFactory = Callable[[], Transport]


class TransportRouter:
    """
    Resolves backend names to transport instances.

    Each backend is created once and reused, so every manager asking for the
    same backend shares one set of channels.
    """

    def __init__(self):
        self._factories: dict[str, TransportFactory] = {"local": LocalTransport}
        self._transports: dict[str, Transport] = {}

    def register(self, name: str, factory: TransportFactory) -> None:
        """Register a backend factory. Replaces any cached instance for the name."""
        self._factories[name] = factory
        self._transports.pop(name, None)

    def get_transport(self, name: Optional[str] = None) -> Transport:
        """
        Get the transport for a backend name.

        Args:
            name: Backend name; defaults to the configured transport

        Returns:
            Transport instance
        """
        resolved = name or get_settings().transport

        if resolved not in self._transports:
            factory = self._factories.get(resolved)
            if factory is None:
                raise ValueError(f"Unknown transport: {resolved}")
            self._transports[resolved] = factory()

        return self._transports[resolved]


# Global router instance
_router: Optional[TransportRouter] = None


def get_transport_router() -> TransportRouter:
    """Get the global transport router instance."""
    global _router
    if _router is None:
        _router = TransportRouter()
    return _router
