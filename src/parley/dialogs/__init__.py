"""Dialog stack machine."""

from .base import (
    END_OF_TURN,
    Dialog,
    DialogInstance,
    DialogReason,
    DialogState,
    DialogTurnResult,
    DialogTurnStatus,
)
from .context import DialogContext, run_dialog
from .dialog_set import DialogSet
from .component import ComponentDialog
from .waterfall import WaterfallDialog, WaterfallStep, WaterfallStepContext

__all__ = [
    "END_OF_TURN",
    "ComponentDialog",
    "Dialog",
    "DialogContext",
    "DialogInstance",
    "DialogReason",
    "DialogSet",
    "DialogState",
    "DialogTurnResult",
    "DialogTurnStatus",
    "WaterfallDialog",
    "WaterfallStep",
    "WaterfallStepContext",
    "run_dialog",
]
