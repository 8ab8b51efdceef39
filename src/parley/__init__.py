"""Parley - resumable multi-turn dialogs."""

from .activity import Activity, ActivityTypes, Attachment, InputHints
from .dialogs import (
    ComponentDialog,
    Dialog,
    DialogContext,
    DialogReason,
    DialogSet,
    DialogTurnResult,
    DialogTurnStatus,
    WaterfallDialog,
    WaterfallStepContext,
)
from .errors import ConfigurationError, ParleyError, UnknownDialogError
from .framework import ParleyFramework
from .prompts import (
    ActivityPrompt,
    AttachmentPrompt,
    ChoicePrompt,
    ConfirmPrompt,
    NumberPrompt,
    PromptOptions,
    PromptValidatorContext,
    TextPrompt,
)
from .turn import TurnContext

__version__ = "0.1.0"

__all__ = [
    "Activity",
    "ActivityPrompt",
    "ActivityTypes",
    "Attachment",
    "AttachmentPrompt",
    "ChoicePrompt",
    "ComponentDialog",
    "ConfigurationError",
    "ConfirmPrompt",
    "Dialog",
    "DialogContext",
    "DialogReason",
    "DialogSet",
    "DialogTurnResult",
    "DialogTurnStatus",
    "InputHints",
    "NumberPrompt",
    "ParleyError",
    "ParleyFramework",
    "PromptOptions",
    "PromptValidatorContext",
    "TextPrompt",
    "TurnContext",
    "UnknownDialogError",
    "WaterfallDialog",
    "WaterfallStepContext",
]
