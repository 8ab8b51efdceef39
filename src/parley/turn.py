"""Per-turn context handed to dialogs."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from loguru import logger

from parley.activity import Activity, text_message

type Sender = Callable[[Activity], Awaitable[Any]]


class TurnContext:
    """Wraps the inbound activity and the outbound send path for one turn.

    A fresh instance is created per turn, so ``responded`` only reflects sends
    made while handling the current inbound activity.
    """

    def __init__(self, activity: Activity, send: Sender | None = None) -> None:
        self._activity = activity
        self._send = send
        self._sent: list[Activity] = []
        self._responded = False

    @property
    def activity(self) -> Activity:
        return self._activity

    @property
    def responded(self) -> bool:
        return self._responded

    @property
    def sent_activities(self) -> list[Activity]:
        return list(self._sent)

    @property
    def conversation_key(self) -> str:
        return self._activity.conversation_key

    async def send_activity(self, activity: Activity | str) -> Any:
        """Send one outbound activity. Sender failures propagate to the caller."""

        outbound = text_message(activity) if isinstance(activity, str) else activity.model_copy(deep=True)
        if not outbound.channel_id:
            outbound.channel_id = self._activity.channel_id
        if not outbound.conversation_id:
            outbound.conversation_id = self._activity.conversation_id

        ack = None
        if self._send is not None:
            ack = await self._send(outbound)
        self._sent.append(outbound)
        self._responded = True
        logger.debug("turn.send type={} text={!r}", outbound.type, outbound.text)
        return ack
