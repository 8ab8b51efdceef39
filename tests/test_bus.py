from __future__ import annotations

import pytest

from parley.activity import Activity
from parley.bus import MessageBus


@pytest.mark.asyncio
async def test_bus_keeps_directions_apart_in_fifo_order() -> None:
    bus = MessageBus()
    await bus.publish_inbound(Activity(text="first"))
    await bus.publish_inbound(Activity(text="second"))
    await bus.publish_outbound(Activity(text="reply"))

    assert bus.pending("inbound") == 2
    assert (await bus.next_inbound()).text == "first"
    assert (await bus.next_inbound(timeout_seconds=1)).text == "second"
    assert (await bus.next_outbound()).text == "reply"


@pytest.mark.asyncio
async def test_bus_times_out_with_none() -> None:
    bus = MessageBus()

    assert await bus.next_inbound(timeout_seconds=0.01) is None
    assert await bus.next_outbound(timeout_seconds=0.01) is None


@pytest.mark.asyncio
async def test_drain_outbound_empties_queue() -> None:
    bus = MessageBus()
    for text in ["a", "b"]:
        await bus.publish_outbound(Activity(text=text))

    assert [message.text for message in bus.drain_outbound()] == ["a", "b"]
    assert bus.pending("outbound") == 0
    assert bus.drain_outbound() == []
