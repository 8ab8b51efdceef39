"""Application-level exception types for Parley."""

from __future__ import annotations


class ParleyError(Exception):
    """Base exception for Parley."""


class ConfigurationError(ParleyError):
    """Raised when a dialog or prompt is constructed or invoked with invalid arguments."""


class UnknownDialogError(ParleyError):
    """Raised when a dialog stack frame references an id that is not registered."""

    def __init__(self, dialog_id: str, action: str = "resolve") -> None:
        self.dialog_id = dialog_id
        self.action = action
        super().__init__(f"{action}: a dialog with an id of '{dialog_id}' wasn't found")
