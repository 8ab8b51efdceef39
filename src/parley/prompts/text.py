"""Prompt for free-form text."""

from __future__ import annotations

from typing import Any

from parley.prompts.base import Prompt
from parley.prompts.options import PromptOptions, PromptRecognizerResult
from parley.turn import TurnContext


class TextPrompt(Prompt[str]):
    """Accepts any message that carries text."""

    async def on_recognize(
        self,
        turn_context: TurnContext,
        state: dict[str, Any],
        options: PromptOptions,
    ) -> PromptRecognizerResult[str]:
        result: PromptRecognizerResult[str] = PromptRecognizerResult()
        activity = turn_context.activity
        if activity.is_message and activity.text is not None:
            result.succeeded = True
            result.value = activity.text
        return result
