"""Scripted conversations for exercising dialogs in tests."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from parley.activity import Activity, ActivityTypes
from parley.dialogs import DialogSet, DialogState, DialogTurnResult, run_dialog
from parley.turn import TurnContext

type ReplyCheck = str | Callable[[Activity], bool]


@dataclass
class _Step:
    kind: str
    payload: Any
    description: str | None = None


class TestFlow:
    """Drive a dialog through scripted user turns and check what it replies.

    Steps are recorded with ``send``/``assert_reply`` and executed in order by
    ``run``. State is dumped and reloaded between turns, the same way a real
    deployment persists it.

        flow = TestFlow(dialogs, "confirm", PromptOptions(prompt="Continue?"))
        flow.send("hi").assert_reply("Continue? (1) Yes or (2) No")
        await flow.run()
    """

    __test__ = False

    def __init__(
        self,
        dialogs: DialogSet,
        dialog_id: str,
        options: Any = None,
        *,
        channel_id: str = "test",
        conversation_id: str = "convo1",
        locale: str | None = None,
    ) -> None:
        self.dialogs = dialogs
        self.dialog_id = dialog_id
        self.options = options
        self.channel_id = channel_id
        self.conversation_id = conversation_id
        self.locale = locale
        self.results: list[DialogTurnResult] = []
        self.stored: dict[str, Any] | None = None
        self._steps: list[_Step] = []
        self._replies: deque[Activity] = deque()

    def send(self, message: str | Activity) -> TestFlow:
        self._steps.append(_Step("send", message))
        return self

    def assert_reply(self, expected: ReplyCheck, description: str | None = None) -> TestFlow:
        self._steps.append(_Step("reply", expected, description))
        return self

    def assert_no_reply(self, description: str | None = None) -> TestFlow:
        self._steps.append(_Step("no_reply", None, description))
        return self

    async def run(self) -> TestFlow:
        for step in self._steps:
            if step.kind == "send":
                await self._turn(step.payload)
            elif step.kind == "reply":
                self._check_reply(step.payload, step.description)
            elif self._replies:
                raise AssertionError(step.description or f"expected no reply, got {self._replies[0].text!r}")
        self._steps.clear()
        return self

    @property
    def depth(self) -> int:
        return len((self.stored or {}).get("dialog_stack", []))

    @property
    def last_result(self) -> DialogTurnResult | None:
        return self.results[-1] if self.results else None

    async def _turn(self, message: str | Activity) -> None:
        activity = message if isinstance(message, Activity) else Activity(type=ActivityTypes.MESSAGE, text=message)
        activity = activity.model_copy(
            update={
                "channel_id": activity.channel_id or self.channel_id,
                "conversation_id": activity.conversation_id or self.conversation_id,
                "locale": activity.locale or self.locale,
            }
        )

        async def capture(outbound: Activity) -> None:
            self._replies.append(outbound)

        state: DialogState = self.dialogs.load_state(self.stored)
        dc = self.dialogs.create_context(TurnContext(activity, send=capture), state)
        self.results.append(await run_dialog(dc, self.dialog_id, self.options))
        self.stored = self.dialogs.dump_state(state)

    def _check_reply(self, expected: ReplyCheck, description: str | None) -> None:
        if not self._replies:
            raise AssertionError(description or f"expected a reply matching {expected!r}, got none")
        reply = self._replies.popleft()
        if callable(expected):
            if not expected(reply):
                raise AssertionError(description or f"reply {reply.text!r} rejected by check")
        elif reply.text != expected:
            raise AssertionError(description or f"expected {expected!r}, got {reply.text!r}")
