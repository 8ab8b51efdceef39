"""Pluggy hook namespace and framework hook specifications."""

from __future__ import annotations

import pluggy

from parley.activity import Activity
from parley.state import StateData

PARLEY_HOOK_NAMESPACE = "parley"
hookspec = pluggy.HookspecMarker(PARLEY_HOOK_NAMESPACE)
hookimpl = pluggy.HookimplMarker(PARLEY_HOOK_NAMESPACE)


class ParleyHookSpecs:
    """Hook contract for Parley framework extensions."""

    @hookspec(firstresult=True)
    def resolve_conversation(self, message: Activity) -> str | None:
        """Resolve the conversation key for one inbound activity."""

    @hookspec(firstresult=True)
    def load_state(self, conversation_key: str) -> StateData | None:
        """Load the dumped dialog stack for one conversation."""

    @hookspec
    def save_state(self, conversation_key: str, state: StateData) -> None:
        """Persist the dumped dialog stack after one turn."""

    @hookspec(firstresult=True)
    def render_outbound(self, message: Activity, conversation_key: str) -> Activity | None:
        """Rewrite one outbound activity before it is dispatched."""

    @hookspec
    def dispatch_outbound(self, message: Activity) -> bool | None:
        """Dispatch one outbound activity to external channel(s)."""

    @hookspec
    def on_error(self, stage: str, error: Exception, message: Activity | None) -> None:
        """Observe framework errors from any stage."""
