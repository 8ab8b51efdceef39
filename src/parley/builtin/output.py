"""Builtin console output hooks."""

from __future__ import annotations

from rich.console import Console

from parley.activity import Activity
from parley.hookspecs import hookimpl


class ConsoleOutputPlugin:
    """Prints outbound activities for the ``console`` channel."""

    channel_id = "console"

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    @hookimpl
    def dispatch_outbound(self, message: Activity) -> bool:
        if message.channel_id != self.channel_id:
            return False
        if message.text:
            self.console.print(message.text, markup=False, highlight=False)
        if message.suggested_actions is not None:
            titles = [action.title or str(action.value) for action in message.suggested_actions.actions]
            self.console.print(" | ".join(f"[{title}]" for title in titles), markup=False, highlight=False)
        return True
