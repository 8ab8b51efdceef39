"""Yes/no prompt."""

from __future__ import annotations

from typing import Any

from parley.choices import channel
from parley.choices.models import Choice, ChoiceFactoryOptions, FindChoicesOptions, ListStyle
from parley.choices.recognizers import recognize_boolean, recognize_choices
from parley.prompts.base import Prompt, PromptValidator
from parley.prompts.culture import choice_options_for, confirm_choices_for, resolve_culture
from parley.prompts.options import PromptOptions, PromptRecognizerResult
from parley.turn import TurnContext


class ConfirmPrompt(Prompt[bool]):
    """Asks a yes/no question and resolves the reply to a bool.

    The reply is first read as a yes/no word in the turn's locale. When the
    choices are shown with numbers, "1" and "2" are accepted as well.
    """

    def __init__(
        self,
        dialog_id: str,
        validator: PromptValidator[bool] | None = None,
        default_locale: str | None = None,
    ) -> None:
        super().__init__(dialog_id, validator)
        self.style = ListStyle.AUTO
        self.default_locale = default_locale
        self.choice_options: ChoiceFactoryOptions | None = None
        self.confirm_choices: tuple[Choice, Choice] | None = None

    async def on_prompt(
        self,
        turn_context: TurnContext,
        state: dict[str, Any],
        options: PromptOptions,
        is_retry: bool,
    ) -> None:
        culture = resolve_culture(turn_context.activity, self.default_locale)
        channel_id = channel.get_channel_id(turn_context)
        choice_options = self.choice_options or choice_options_for(culture)
        choices = list(self.confirm_choices or confirm_choices_for(culture))

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
    ) -> PromptRecognizerResult[bool]:
        result: PromptRecognizerResult[bool] = PromptRecognizerResult()
        activity = turn_context.activity
        if not activity.is_message:
            return result

        culture = resolve_culture(activity, self.default_locale)
        value = recognize_boolean(activity.text, culture)
        if value is not None:
            result.succeeded = True
            result.value = value
            return result

        choice_options = self.choice_options or choice_options_for(culture)
        if choice_options.include_numbers is None or choice_options.include_numbers:
            choices = list(self.confirm_choices or confirm_choices_for(culture))
            found = recognize_choices(activity.text, choices, FindChoicesOptions(locale=culture))
            if found:
                result.succeeded = True
                result.value = found[0].resolution.index == 0
        return result
