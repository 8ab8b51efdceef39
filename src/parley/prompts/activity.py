"""Prompt that waits for an arbitrary activity."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

from loguru import logger

from parley.activity import Activity
from parley.dialogs.base import END_OF_TURN, Dialog, DialogInstance, DialogReason, DialogTurnResult
from parley.errors import ConfigurationError
from parley.prompts.base import (
    PERSISTED_OPTIONS,
    PERSISTED_STATE,
    PromptValidator,
    load_prompt_state,
    prepare_options,
)
from parley.prompts.options import PromptOptions, PromptRecognizerResult, PromptValidatorContext
from parley.turn import TurnContext

if TYPE_CHECKING:
    from parley.dialogs.context import DialogContext


class ActivityPrompt(Dialog):
    """Waits for any activity, message or not, that the validator accepts.

    Unlike the message prompts it never sends a retry prompt; the validator is
    expected to reply itself when it rejects an activity.
    """

    def __init__(self, dialog_id: str, validator: PromptValidator[Activity]) -> None:
        super().__init__(dialog_id)
        if validator is None:
            raise ConfigurationError("ActivityPrompt requires a validator")
        self._validator = validator

    async def begin_dialog(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        opt = prepare_options(options)

        state = dc.active_dialog.state
        state[PERSISTED_OPTIONS] = opt
        state[PERSISTED_STATE] = {}

        await self.on_prompt(dc.context, state[PERSISTED_STATE], opt)
        return END_OF_TURN

    async def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        instance = dc.active_dialog
        state = instance.state[PERSISTED_STATE]
        options = instance.state[PERSISTED_OPTIONS]
        recognized = await self.on_recognize(dc.context, state, options)

        outcome = self._validator(PromptValidatorContext(dc.context, recognized, state, options))
        if inspect.isawaitable(outcome):
            outcome = await outcome
        if outcome:
            return await dc.end_dialog(recognized.value)

        logger.debug("prompt.rejected id={} type={}", self.id, dc.context.activity.type)
        return END_OF_TURN

    async def resume_dialog(self, dc: DialogContext, reason: DialogReason, result: Any = None) -> DialogTurnResult:
        await self.reprompt_dialog(dc.context, dc.active_dialog)
        return END_OF_TURN

    async def reprompt_dialog(self, turn_context: TurnContext, instance: DialogInstance) -> None:
        await self.on_prompt(turn_context, instance.state[PERSISTED_STATE], instance.state[PERSISTED_OPTIONS])

    async def on_prompt(self, turn_context: TurnContext, state: dict[str, Any], options: PromptOptions) -> None:
        if options.prompt is not None:
            await turn_context.send_activity(options.prompt)

    async def on_recognize(
        self,
        turn_context: TurnContext,
        state: dict[str, Any],
        options: PromptOptions,
    ) -> PromptRecognizerResult[Activity]:
        return PromptRecognizerResult(succeeded=True, value=turn_context.activity)

    def dump_state(self, state: Any) -> Any:
        return {
            PERSISTED_OPTIONS: state[PERSISTED_OPTIONS].model_dump(mode="json"),
            PERSISTED_STATE: dict(state.get(PERSISTED_STATE) or {}),
        }

    def load_state(self, data: Any) -> Any:
        return load_prompt_state(data)
