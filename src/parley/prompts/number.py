"""Prompt for a numeric answer."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from parley.choices.recognizers import recognize_number, resolved_number
from parley.errors import ConfigurationError
from parley.prompts.base import Prompt, PromptValidator
from parley.prompts.culture import ENGLISH
from parley.prompts.options import PromptOptions, PromptRecognizerResult
from parley.turn import TurnContext

SUPPORTED_NUMBER_TYPES: tuple[type, ...] = (int, float, Decimal)


class NumberPrompt(Prompt[Any]):
    """Recognizes the first number in the reply and converts it to ``number_type``.

    ``int`` only accepts whole numbers. Numerals and number words are read in
    the activity's locale, falling back to ``default_locale``.
    """

    def __init__(
        self,
        dialog_id: str,
        validator: PromptValidator[Any] | None = None,
        default_locale: str | None = None,
        number_type: type = float,
    ) -> None:
        super().__init__(dialog_id, validator)
        if number_type not in SUPPORTED_NUMBER_TYPES:
            raise ConfigurationError(f"NumberPrompt: type argument {number_type.__name__} is not supported")
        self.default_locale = default_locale
        self.number_type = number_type

    async def on_recognize(
        self,
        turn_context: TurnContext,
        state: dict[str, Any],
        options: PromptOptions,
    ) -> PromptRecognizerResult[Any]:
        result: PromptRecognizerResult[Any] = PromptRecognizerResult()
        activity = turn_context.activity
        if not activity.is_message:
            return result

        culture = (activity.locale or self.default_locale or ENGLISH).lower()
        numbers = recognize_number(activity.text, culture)
        if not numbers:
            return result

        value = resolved_number(numbers[0])
        if value is None:
            return result
        if self.number_type is int:
            if value != value.to_integral_value():
                return result
            result.value = int(value)
        elif self.number_type is Decimal:
            result.value = value
        else:
            result.value = float(value)
        result.succeeded = True
        return result
