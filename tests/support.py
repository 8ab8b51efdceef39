from __future__ import annotations

from typing import Any

from parley.activity import Activity, ActivityTypes
from parley.dialogs import END_OF_TURN, Dialog, DialogContext, DialogInstance, DialogReason, DialogTurnResult
from parley.turn import TurnContext


def message(text: str | None = None, **fields: Any) -> Activity:
    fields.setdefault("channel_id", "test")
    fields.setdefault("conversation_id", "convo1")
    return Activity(type=ActivityTypes.MESSAGE, text=text, **fields)


def turn(text: str | None = "hi", **fields: Any) -> TurnContext:
    return TurnContext(message(text, **fields))


class WaitingDialog(Dialog):
    """Waits for one turn, then ends with ``result`` (or the user's text)."""

    def __init__(self, dialog_id: str, result: Any = None) -> None:
        super().__init__(dialog_id)
        self.result = result
        self.begun_with: list[Any] = []
        self.ended: list[DialogReason] = []

    async def begin_dialog(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        self.begun_with.append(options)
        return END_OF_TURN

    async def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        return await dc.end_dialog(self.result if self.result is not None else dc.context.activity.text)

    async def end_dialog(self, turn_context: TurnContext, instance: DialogInstance, reason: DialogReason) -> None:
        self.ended.append(reason)
