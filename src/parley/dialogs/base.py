"""Dialog lifecycle contract and the data carried on the dialog stack."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from parley.errors import ConfigurationError

if TYPE_CHECKING:
    from parley.dialogs.context import DialogContext
    from parley.turn import TurnContext


class DialogTurnStatus(StrEnum):
    EMPTY = "empty"
    WAITING = "waiting"
    COMPLETE = "complete"
    CANCELLED = "cancelled"


class DialogReason(StrEnum):
    BEGIN_CALLED = "beginCalled"
    CONTINUE_CALLED = "continueCalled"
    END_CALLED = "endCalled"
    REPLACE_CALLED = "replaceCalled"
    CANCEL_CALLED = "cancelCalled"
    NEXT_CALLED = "nextCalled"


@dataclass
class DialogInstance:
    """One stack frame. ``state`` belongs to the dialog that pushed the frame."""

    id: str
    state: Any = field(default_factory=dict)


@dataclass
class DialogState:
    """The dialog stack for one conversation; index 0 is the active frame."""

    dialog_stack: list[DialogInstance] = field(default_factory=list)


@dataclass(frozen=True)
class DialogTurnResult:
    status: DialogTurnStatus
    result: Any = None


END_OF_TURN = DialogTurnResult(DialogTurnStatus.WAITING)


class Dialog(ABC):
    """Base class for anything that can sit on the dialog stack.

    Subclasses must implement ``begin_dialog``. The remaining handlers default to
    ending the dialog, so a dialog that never waits for input finishes on the
    following turn and one that pushed a child passes the child's result through.
    """

    def __init__(self, dialog_id: str) -> None:
        if not dialog_id or not dialog_id.strip():
            raise ConfigurationError("dialog_id is required")
        self._id = dialog_id

    @property
    def id(self) -> str:
        return self._id

    @abstractmethod
    async def begin_dialog(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        """Start the dialog on the frame that was just pushed."""

    async def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        return await dc.end_dialog()

    async def resume_dialog(self, dc: DialogContext, reason: DialogReason, result: Any = None) -> DialogTurnResult:
        return await dc.end_dialog(result)

    async def reprompt_dialog(self, turn_context: TurnContext, instance: DialogInstance) -> None:
        return None

    async def end_dialog(self, turn_context: TurnContext, instance: DialogInstance, reason: DialogReason) -> None:
        return None

    def dump_state(self, state: Any) -> Any:
        """Convert frame state into JSON-compatible data."""

        return dict(state) if isinstance(state, dict) else state

    def load_state(self, data: Any) -> Any:
        """Rebuild frame state from the output of ``dump_state``."""

        return dict(data) if isinstance(data, dict) else data

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self._id!r}>"
