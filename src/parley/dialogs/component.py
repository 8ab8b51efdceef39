"""Dialog that hosts its own inner dialog stack."""

from __future__ import annotations

from typing import Any

from parley.dialogs.base import (
    END_OF_TURN,
    Dialog,
    DialogInstance,
    DialogReason,
    DialogState,
    DialogTurnResult,
    DialogTurnStatus,
)
from parley.dialogs.context import DialogContext
from parley.dialogs.dialog_set import DialogSet
from parley.errors import ConfigurationError
from parley.turn import TurnContext

PERSISTED_DIALOG_STATE = "dialogs"


class ComponentDialog(Dialog):
    """Groups a set of dialogs behind a single frame on the outer stack.

    The inner stack is stored in the component's frame, so the outer stack only
    ever sees one entry for the whole component.
    """

    def __init__(self, dialog_id: str) -> None:
        super().__init__(dialog_id)
        self._dialogs = DialogSet()
        self.initial_dialog_id: str | None = None

    def add_dialog(self, dialog: Dialog) -> ComponentDialog:
        self._dialogs.add(dialog)
        if self.initial_dialog_id is None:
            self.initial_dialog_id = dialog.id
        return self

    def find_dialog(self, dialog_id: str) -> Dialog | None:
        return self._dialogs.find(dialog_id)

    async def begin_dialog(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        inner_state = DialogState()
        dc.active_dialog.state[PERSISTED_DIALOG_STATE] = inner_state
        inner_dc = DialogContext(self._dialogs, dc.context, inner_state)

        turn_result = await self.on_begin_dialog(inner_dc, options)
        if turn_result.status != DialogTurnStatus.WAITING:
            return await self.end_component(dc, turn_result.result)
        return END_OF_TURN

    async def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        inner_dc = DialogContext(self._dialogs, dc.context, dc.active_dialog.state[PERSISTED_DIALOG_STATE])
        turn_result = await self.on_continue_dialog(inner_dc)
        if turn_result.status != DialogTurnStatus.WAITING:
            return await self.end_component(dc, turn_result.result)
        return END_OF_TURN

    async def resume_dialog(self, dc: DialogContext, reason: DialogReason, result: Any = None) -> DialogTurnResult:
        # Something was pushed over the component and has finished; the inner stack is untouched.
        await self.reprompt_dialog(dc.context, dc.active_dialog)
        return END_OF_TURN

    async def reprompt_dialog(self, turn_context: TurnContext, instance: DialogInstance) -> None:
        inner_dc = DialogContext(self._dialogs, turn_context, instance.state[PERSISTED_DIALOG_STATE])
        await inner_dc.reprompt_dialog()

    async def end_dialog(self, turn_context: TurnContext, instance: DialogInstance, reason: DialogReason) -> None:
        if reason == DialogReason.CANCEL_CALLED:
            inner_dc = DialogContext(self._dialogs, turn_context, instance.state[PERSISTED_DIALOG_STATE])
            await inner_dc.cancel_all_dialogs()

    async def on_begin_dialog(self, inner_dc: DialogContext, options: Any = None) -> DialogTurnResult:
        if self.initial_dialog_id is None:
            raise ConfigurationError(f"component dialog '{self.id}' has no dialogs")
        return await inner_dc.begin_dialog(self.initial_dialog_id, options)

    async def on_continue_dialog(self, inner_dc: DialogContext) -> DialogTurnResult:
        return await inner_dc.continue_dialog()

    async def end_component(self, outer_dc: DialogContext, result: Any = None) -> DialogTurnResult:
        return await outer_dc.end_dialog(result)

    def dump_state(self, state: Any) -> Any:
        return {PERSISTED_DIALOG_STATE: self._dialogs.dump_state(state[PERSISTED_DIALOG_STATE])}

    def load_state(self, data: Any) -> Any:
        return {PERSISTED_DIALOG_STATE: self._dialogs.load_state((data or {}).get(PERSISTED_DIALOG_STATE))}
