"""Registry of dialogs addressable by id."""

from __future__ import annotations

from typing import Any

from loguru import logger

from parley.dialogs.base import Dialog, DialogInstance, DialogState
from parley.dialogs.context import DialogContext
from parley.errors import ConfigurationError, UnknownDialogError
from parley.turn import TurnContext


class DialogSet:
    """Dialogs registered under unique ids.

    The set is read-only once turns start being processed, so a single instance
    can be shared by every conversation.
    """

    def __init__(self, dialogs: list[Dialog] | None = None) -> None:
        self._dialogs: dict[str, Dialog] = {}
        for dialog in dialogs or []:
            self.add(dialog)

    def add(self, dialog: Dialog) -> DialogSet:
        if dialog is None:
            raise ConfigurationError("dialog is required")
        if dialog.id in self._dialogs:
            raise ConfigurationError(f"DialogSet.add(): a dialog with an id of '{dialog.id}' already added")
        self._dialogs[dialog.id] = dialog
        logger.debug("dialog_set.add id={} kind={}", dialog.id, type(dialog).__name__)
        return self

    def find(self, dialog_id: str) -> Dialog | None:
        if not dialog_id or not dialog_id.strip():
            raise ConfigurationError("dialog_id is required")
        return self._dialogs.get(dialog_id)

    def ids(self) -> list[str]:
        return list(self._dialogs)

    def create_context(self, turn_context: TurnContext, state: DialogState | None = None) -> DialogContext:
        return DialogContext(self, turn_context, state if state is not None else DialogState())

    def load_state(self, data: dict[str, Any] | None) -> DialogState:
        """Rehydrate a stack that was produced by ``dump_state``."""

        state = DialogState()
        for frame in (data or {}).get("dialog_stack", []):
            dialog = self._dialogs.get(frame["id"])
            if dialog is None:
                raise UnknownDialogError(frame["id"], "load")
            state.dialog_stack.append(DialogInstance(id=frame["id"], state=dialog.load_state(frame.get("state"))))
        return state

    def dump_state(self, state: DialogState) -> dict[str, Any]:
        frames = []
        for instance in state.dialog_stack:
            dialog = self._dialogs.get(instance.id)
            if dialog is None:
                raise UnknownDialogError(instance.id, "save")
            frames.append({"id": instance.id, "state": dialog.dump_state(instance.state)})
        return {"dialog_stack": frames}

    def __contains__(self, dialog_id: object) -> bool:
        return dialog_id in self._dialogs

    def __len__(self) -> int:
        return len(self._dialogs)
