"""Ask, recognize, validate and retry: the loop shared by every prompt."""

from __future__ import annotations

import copy
import inspect
from abc import abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any

from loguru import logger

from parley.activity import Activity, InputHints, text_message
from parley.choices.factory import ChoiceFactory
from parley.choices.models import Choice, ChoiceFactoryOptions, ListStyle
from parley.dialogs.base import END_OF_TURN, Dialog, DialogInstance, DialogReason, DialogTurnResult
from parley.errors import ConfigurationError
from parley.prompts.options import PromptOptions, PromptRecognizerResult, PromptValidatorContext
from parley.turn import TurnContext

if TYPE_CHECKING:
    from parley.dialogs.context import DialogContext

type PromptValidator[T] = Callable[[PromptValidatorContext[T]], bool | Awaitable[bool]]

PERSISTED_OPTIONS = "options"
PERSISTED_STATE = "state"


class Prompt[T](Dialog):
    """A dialog that asks a question and waits until it gets an acceptable answer.

    Subclasses supply ``on_recognize`` and may override ``on_prompt``. When a
    validator is given it alone decides whether a recognition is accepted.
    """

    def __init__(self, dialog_id: str, validator: PromptValidator[T] | None = None) -> None:
        super().__init__(dialog_id)
        self._validator = validator

    async def begin_dialog(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        opt = prepare_options(options)

        state = dc.active_dialog.state
        state[PERSISTED_OPTIONS] = opt
        state[PERSISTED_STATE] = {}

        await self.on_prompt(dc.context, state[PERSISTED_STATE], opt, False)
        return END_OF_TURN

    async def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        if not dc.context.activity.is_message:
            return END_OF_TURN

        instance = dc.active_dialog
        state = instance.state[PERSISTED_STATE]
        options = instance.state[PERSISTED_OPTIONS]
        recognized = await self.on_recognize(dc.context, state, options)

        if self._validator is not None:
            prompt_context = PromptValidatorContext(dc.context, recognized, state, options)
            is_valid = bool(await _maybe_await(self._validator(prompt_context)))
        else:
            is_valid = recognized.succeeded

        if is_valid:
            logger.debug("prompt.accepted id={}", self.id)
            return await dc.end_dialog(recognized.value)

        logger.debug("prompt.rejected id={} responded={}", self.id, dc.context.responded)
        if not dc.context.responded:
            await self.on_prompt(dc.context, state, options, True)
        return END_OF_TURN

    async def resume_dialog(self, dc: DialogContext, reason: DialogReason, result: Any = None) -> DialogTurnResult:
        # A prompt is normally a leaf; if something ran on top of it, ask again instead of ending.
        await self.reprompt_dialog(dc.context, dc.active_dialog)
        return END_OF_TURN

    async def reprompt_dialog(self, turn_context: TurnContext, instance: DialogInstance) -> None:
        state = instance.state[PERSISTED_STATE]
        options = instance.state[PERSISTED_OPTIONS]
        await self.on_prompt(turn_context, state, options, False)

    async def on_prompt(
        self,
        turn_context: TurnContext,
        state: dict[str, Any],
        options: PromptOptions,
        is_retry: bool,
    ) -> None:
        if is_retry and options.retry_prompt is not None:
            await turn_context.send_activity(options.retry_prompt)
        elif options.prompt is not None:
            await turn_context.send_activity(options.prompt)

    @abstractmethod
    async def on_recognize(
        self,
        turn_context: TurnContext,
        state: dict[str, Any],
        options: PromptOptions,
    ) -> PromptRecognizerResult[T]:
        """Extract a value of type ``T`` from the current activity."""

    def append_choices(
        self,
        prompt: Activity | None,
        channel_id: str | None,
        choices: Sequence[Choice] | None,
        style: ListStyle,
        options: ChoiceFactoryOptions | None = None,
    ) -> Activity:
        """Render ``choices`` into a copy of ``prompt`` using ``style``."""

        return append_choices(prompt, channel_id, choices, style, options)

    def dump_state(self, state: Any) -> Any:
        options = state.get(PERSISTED_OPTIONS)
        return {
            PERSISTED_OPTIONS: options.model_dump(mode="json") if options is not None else None,
            PERSISTED_STATE: copy.deepcopy(state.get(PERSISTED_STATE) or {}),
        }

    def load_state(self, data: Any) -> Any:
        return load_prompt_state(data)


def append_choices(
    prompt: Activity | None,
    channel_id: str | None,
    choices: Sequence[Choice] | None,
    style: ListStyle,
    options: ChoiceFactoryOptions | None = None,
) -> Activity:
    """Render choices into a message without touching the caller's activity.

    The returned activity is always a new object; when ``prompt`` is None it is a
    plain message marked as expecting input.
    """

    text = prompt.text if prompt is not None and prompt.text else ""
    choices = list(choices or [])

    if style == ListStyle.INLINE:
        rendered = ChoiceFactory.inline(choices, text, None, options)
    elif style == ListStyle.LIST:
        rendered = ChoiceFactory.list_style(choices, text, None, options)
    elif style == ListStyle.SUGGESTED_ACTION:
        rendered = ChoiceFactory.suggested_action(choices, text)
    elif style == ListStyle.NONE:
        rendered = text_message(text)
    else:
        rendered = ChoiceFactory.for_channel(channel_id, choices, text, None, options)

    if prompt is None:
        rendered.input_hint = InputHints.EXPECTING_INPUT
        return rendered

    result = prompt.model_copy(deep=True)
    result.text = rendered.text
    if rendered.suggested_actions is not None and rendered.suggested_actions.actions:
        result.suggested_actions = rendered.suggested_actions
    if rendered.attachments:
        result.attachments = rendered.attachments
    return result


def prepare_options(options: Any) -> PromptOptions:
    if not isinstance(options, PromptOptions):
        raise ConfigurationError("prompt options are required for prompt dialogs")

    opt = options.model_copy(deep=True)
    if opt.prompt is not None and not opt.prompt.input_hint:
        opt.prompt.input_hint = InputHints.EXPECTING_INPUT
    if opt.retry_prompt is not None and not opt.retry_prompt.input_hint:
        opt.retry_prompt.input_hint = InputHints.EXPECTING_INPUT
    return opt


def load_prompt_state(data: Any) -> dict[str, Any]:
    data = data or {}
    raw_options = data.get(PERSISTED_OPTIONS)
    return {
        PERSISTED_OPTIONS: PromptOptions.model_validate(raw_options) if raw_options is not None else PromptOptions(),
        PERSISTED_STATE: dict(data.get(PERSISTED_STATE) or {}),
    }


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value
