"""Prompt the user to pick one of a list of choices."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from parley.choices import channel
from parley.choices.models import ChoiceFactoryOptions, FindChoicesOptions, FoundChoice, ListStyle
from parley.choices.recognizers import recognize_choices
from parley.prompts.base import Prompt, PromptValidator
from parley.prompts.culture import choice_options_for, resolve_culture
from parley.prompts.options import PromptOptions, PromptRecognizerResult
from parley.turn import TurnContext


class ChoicePrompt(Prompt[FoundChoice]):
    """Renders ``options.choices`` with ``style`` and resolves the reply to a ``FoundChoice``."""

    def __init__(
        self,
        dialog_id: str,
        validator: PromptValidator[FoundChoice] | None = None,
        default_locale: str | None = None,
    ) -> None:
        super().__init__(dialog_id, validator)
        self.style = ListStyle.AUTO
        self.default_locale = default_locale
        self.choice_options: ChoiceFactoryOptions | None = None
        self.recognizer_options: FindChoicesOptions | None = None

    async def on_prompt(
        self,
        turn_context: TurnContext,
        state: dict[str, Any],
        options: PromptOptions,
        is_retry: bool,
    ) -> None:
        culture = resolve_culture(turn_context.activity, self.default_locale)
        choices = options.choices or []
        channel_id = channel.get_channel_id(turn_context)
        choice_options = self.choice_options or choice_options_for(culture)

        if is_retry and options.retry_prompt is not None:
            prompt = self.append_choices(options.retry_prompt, channel_id, choices, self.style, choice_options)
        else:
            prompt = self.append_choices(options.prompt, channel_id, choices, self.style, choice_options)
        await turn_context.send_activity(prompt)

    async def on_recognize(
        self,
        turn_context: TurnContext,
        state: dict[str, Any],
        options: PromptOptions,
    ) -> PromptRecognizerResult[FoundChoice]:
        result: PromptRecognizerResult[FoundChoice] = PromptRecognizerResult()
        activity = turn_context.activity
        if not activity.is_message:
            return result

        find_options = replace(self.recognizer_options) if self.recognizer_options else FindChoicesOptions()
        find_options.locale = resolve_culture(activity, self.default_locale)
        found = recognize_choices(activity.text, options.choices or [], find_options)
        if found:
            result.succeeded = True
            result.value = found[0].resolution
        return result
