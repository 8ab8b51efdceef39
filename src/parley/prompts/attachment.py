"""Prompt for one or more file attachments."""

from __future__ import annotations

from typing import Any

from parley.activity import Attachment
from parley.prompts.base import Prompt
from parley.prompts.options import PromptOptions, PromptRecognizerResult
from parley.turn import TurnContext


class AttachmentPrompt(Prompt[list[Attachment]]):
    async def on_recognize(
        self,
        turn_context: TurnContext,
        state: dict[str, Any],
        options: PromptOptions,
    ) -> PromptRecognizerResult[list[Attachment]]:
        result: PromptRecognizerResult[list[Attachment]] = PromptRecognizerResult()
        activity = turn_context.activity
        if activity.is_message and activity.attachments:
            result.succeeded = True
            result.value = list(activity.attachments)
        return result
