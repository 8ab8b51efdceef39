"""Dialog stack manager for a single turn."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from parley.dialogs.base import Dialog, DialogInstance, DialogReason, DialogState, DialogTurnResult, DialogTurnStatus
from parley.errors import ConfigurationError, UnknownDialogError
from parley.prompts.options import PromptOptions
from parley.turn import TurnContext

if TYPE_CHECKING:
    from parley.dialogs.dialog_set import DialogSet


class DialogContext:
    """Routes one turn to the dialog stack of one conversation.

    Only the active frame (index 0) is continued. When a frame ends, the frame
    beneath it is resumed with the result, or the turn completes if none is left.
    """

    def __init__(self, dialogs: DialogSet, turn_context: TurnContext, state: DialogState) -> None:
        if dialogs is None:
            raise ConfigurationError("dialogs is required")
        if turn_context is None:
            raise ConfigurationError("turn_context is required")
        self._dialogs = dialogs
        self._context = turn_context
        self._state = state

    @property
    def dialogs(self) -> DialogSet:
        return self._dialogs

    @property
    def context(self) -> TurnContext:
        return self._context

    @property
    def state(self) -> DialogState:
        return self._state

    @property
    def stack(self) -> list[DialogInstance]:
        return self._state.dialog_stack

    @property
    def active_dialog(self) -> DialogInstance | None:
        return self.stack[0] if self.stack else None

    async def begin_dialog(self, dialog_id: str, options: Any = None) -> DialogTurnResult:
        """Push a new frame for ``dialog_id`` and start it."""

        if not dialog_id or not dialog_id.strip():
            raise ConfigurationError("dialog_id is required")
        dialog = self._dialogs.find(dialog_id)
        if dialog is None:
            raise UnknownDialogError(dialog_id, "begin")

        self.stack.insert(0, DialogInstance(id=dialog_id, state={}))
        logger.debug("dialog.begin id={} depth={}", dialog_id, len(self.stack))
        return await dialog.begin_dialog(self, options)

    async def prompt(self, dialog_id: str, options: PromptOptions) -> DialogTurnResult:
        """Begin a prompt dialog. Prompts cannot start without options."""

        if not isinstance(options, PromptOptions):
            raise ConfigurationError("prompt options are required for prompt dialogs")
        return await self.begin_dialog(dialog_id, options)

    async def continue_dialog(self) -> DialogTurnResult:
        instance = self.active_dialog
        if instance is None:
            return DialogTurnResult(DialogTurnStatus.EMPTY)

        dialog = self._resolve(instance.id, "continue")
        logger.debug("dialog.continue id={} depth={}", instance.id, len(self.stack))
        return await dialog.continue_dialog(self)

    async def end_dialog(self, result: Any = None) -> DialogTurnResult:
        """Pop the active frame and hand ``result`` to whatever is beneath it."""

        await self._end_active_dialog(DialogReason.END_CALLED)

        instance = self.active_dialog
        if instance is not None:
            dialog = self._resolve(instance.id, "resume")
            logger.debug("dialog.resume id={} depth={}", instance.id, len(self.stack))
            return await dialog.resume_dialog(self, DialogReason.END_CALLED, result)
        return DialogTurnResult(DialogTurnStatus.COMPLETE, result)

    async def cancel_all_dialogs(self) -> DialogTurnResult:
        if not self.stack:
            return DialogTurnResult(DialogTurnStatus.EMPTY)

        while self.stack:
            await self._end_active_dialog(DialogReason.CANCEL_CALLED)
        logger.debug("dialog.cancel_all")
        return DialogTurnResult(DialogTurnStatus.CANCELLED)

    async def replace_dialog(self, dialog_id: str, options: Any = None) -> DialogTurnResult:
        await self._end_active_dialog(DialogReason.REPLACE_CALLED)
        return await self.begin_dialog(dialog_id, options)

    async def reprompt_dialog(self) -> None:
        instance = self.active_dialog
        if instance is None:
            return
        dialog = self._resolve(instance.id, "reprompt")
        await dialog.reprompt_dialog(self._context, instance)

    async def _end_active_dialog(self, reason: DialogReason) -> None:
        instance = self.active_dialog
        if instance is None:
            return
        dialog = self._resolve(instance.id, "end")
        await dialog.end_dialog(self._context, instance, reason)
        self.stack.pop(0)
        logger.debug("dialog.end id={} reason={} depth={}", instance.id, reason, len(self.stack))

    def _resolve(self, dialog_id: str, action: str) -> Dialog:
        dialog = self._dialogs.find(dialog_id)
        if dialog is None:
            raise UnknownDialogError(dialog_id, action)
        return dialog


async def run_dialog(dc: DialogContext, dialog_id: str, options: Any = None) -> DialogTurnResult:
    """Continue the active dialog, or begin ``dialog_id`` when the stack is empty."""

    result = await dc.continue_dialog()
    if result.status == DialogTurnStatus.EMPTY:
        result = await dc.begin_dialog(dialog_id, options)
    return result
