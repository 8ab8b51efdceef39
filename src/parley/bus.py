"""In-process activity bus feeding the framework."""

from __future__ import annotations

import asyncio
from typing import Literal, Protocol

from parley.activity import Activity

type Direction = Literal["inbound", "outbound"]


class BusProtocol(Protocol):
    """What ``ParleyFramework.handle_bus_once`` needs from a bus."""

    async def publish_inbound(self, message: Activity) -> None: ...

    async def publish_outbound(self, message: Activity) -> None: ...

    async def next_inbound(self, timeout_seconds: float | None = None) -> Activity | None: ...

    async def next_outbound(self, timeout_seconds: float | None = None) -> Activity | None: ...


class MessageBus:
    """Two FIFO queues of activities; ``next_*`` returns None when the timeout expires."""

    def __init__(self) -> None:
        self._queues: dict[Direction, asyncio.Queue[Activity]] = {
            "inbound": asyncio.Queue(),
            "outbound": asyncio.Queue(),
        }

    async def publish_inbound(self, message: Activity) -> None:
        self._queues["inbound"].put_nowait(message)

    async def publish_outbound(self, message: Activity) -> None:
        self._queues["outbound"].put_nowait(message)

    async def next_inbound(self, timeout_seconds: float | None = None) -> Activity | None:
        return await self._take("inbound", timeout_seconds)

    async def next_outbound(self, timeout_seconds: float | None = None) -> Activity | None:
        return await self._take("outbound", timeout_seconds)

    def drain_outbound(self) -> list[Activity]:
        """Remove and return every outbound activity queued so far."""

        queue = self._queues["outbound"]
        drained: list[Activity] = []
        while not queue.empty():
            drained.append(queue.get_nowait())
        return drained

    def pending(self, direction: Direction) -> int:
        return self._queues[direction].qsize()

    async def _take(self, direction: Direction, timeout_seconds: float | None) -> Activity | None:
        get = self._queues[direction].get()
        if timeout_seconds is None:
            return await get
        try:
            return await asyncio.wait_for(get, timeout=timeout_seconds)
        except TimeoutError:
            return None
