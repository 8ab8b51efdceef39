"""Builtin state persistence hooks."""

from __future__ import annotations

from parley.hookspecs import hookimpl
from parley.state import StateData, StateStore


class StateStorePlugin:
    """Serves ``load_state``/``save_state`` from a ``StateStore``."""

    def __init__(self, store: StateStore) -> None:
        self.store = store

    @hookimpl
    async def load_state(self, conversation_key: str) -> StateData | None:
        return await self.store.load(conversation_key)

    @hookimpl
    async def save_state(self, conversation_key: str, state: StateData) -> None:
        await self.store.save(conversation_key, state)
