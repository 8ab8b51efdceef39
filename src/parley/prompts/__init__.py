"""Typed prompts built on the dialog stack."""

from .activity import ActivityPrompt
from .attachment import AttachmentPrompt
from .base import Prompt, PromptValidator, append_choices
from .choice import ChoicePrompt
from .confirm import ConfirmPrompt
from .number import NumberPrompt
from .options import PromptOptions, PromptRecognizerResult, PromptValidatorContext
from .text import TextPrompt

__all__ = [
    "ActivityPrompt",
    "AttachmentPrompt",
    "ChoicePrompt",
    "ConfirmPrompt",
    "NumberPrompt",
    "Prompt",
    "PromptOptions",
    "PromptRecognizerResult",
    "PromptValidator",
    "PromptValidatorContext",
    "TextPrompt",
    "append_choices",
]
