from typing import Any, Optional

import pytest

from crosstab.transport import Transport, TransportClosedError, TransportError, TransportHandle
from crosstab.transport.local import LocalTransport


class FakeHandle(TransportHandle):
    def __init__(self, transport: "FakeTransport", name: str):
        self._transport = transport
        self._name = name
        self._closed = False
        self.handler = None
        self.sent: list[Any] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, message: Any) -> None:
        if self._closed:
            raise TransportClosedError(f"{self._name} closed")
        if self._name in self._transport.fail_send:
            raise TransportError(f"send rejected on {self._name}")
        self.sent.append(message)

    def set_inbound_handler(self, handler) -> None:
        self.handler = handler

    def close(self) -> None:
        if self._name in self._transport.fail_close:
            raise TransportError(f"close rejected on {self._name}")
        self._closed = True

    def deliver(self, message: Any) -> None:
        self.handler(message)


class FakeTransport(Transport):
    """Records every handle it opens; failures are scripted per channel name."""

    def __init__(self, fail_open: Optional[set[str]] = None):
        self.fail_open = fail_open or set()
        self.fail_send: set[str] = set()
        self.fail_close: set[str] = set()
        self.handles: list[FakeHandle] = []

    @property
    def transport_name(self) -> str:
        return "fake"

    def open(self, name: str) -> FakeHandle:
        if name in self.fail_open:
            raise TransportError(f"cannot open {name}")
        handle = FakeHandle(self, name)
        self.handles.append(handle)
        return handle

    def handle(self, name: str) -> FakeHandle:
        return next(h for h in self.handles if h.name == name)


@pytest.fixture
def transport() -> LocalTransport:
    return LocalTransport()


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()
