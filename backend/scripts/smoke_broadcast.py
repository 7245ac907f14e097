import asyncio
from typing import Any

from crosstab.communication import CrossTabCommunicationManager, SendError
from crosstab.transport import LocalTransport


async def main() -> None:
    transport = LocalTransport()

    tab_a = CrossTabCommunicationManager("X", transport=transport)
    tab_b = CrossTabCommunicationManager("Y", transport=transport)
    tab_c = CrossTabCommunicationManager("X", transport=transport)

    received_b: list[Any] = []
    received_c: list[Any] = []
    tab_b.register_callback(received_b.append)
    tab_c.register_callback(received_c.append)

    tab_a.broadcast({"v": 1})
    tab_a.send_message({"v": 2})

    # Delivery is scheduled on the running loop.
    await asyncio.sleep(0)

    assert received_b == [{"v": 1}], f"received_b={received_b}"
    assert received_c == [{"v": 1}, {"v": 2}], f"received_c={received_c}"
    assert tab_a.get_history(True) == [[{"v": 2}], [{"v": 1}]], tab_a.get_history(True)
    assert tab_b.get_history(True) == [[], []], tab_b.get_history(True)

    tab_a.close()
    try:
        tab_a.send_message({"v": 3})
    except SendError:
        pass
    else:
        raise AssertionError("send after close did not fail")

    tab_b.close()
    tab_c.close()
    assert transport.channel_names() == [], transport.channel_names()

    print("smoke_broadcast: ok")


if __name__ == "__main__":
    asyncio.run(main())
