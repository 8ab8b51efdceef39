"""Hook-first Parley turn runtime."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import pluggy
from loguru import logger

from parley.activity import Activity
from parley.builtin.state import StateStorePlugin
from parley.bus import BusProtocol, MessageBus
from parley.config import Settings
from parley.dialogs import DialogSet, run_dialog
from parley.hook_runtime import HookRuntime
from parley.hookspecs import PARLEY_HOOK_NAMESPACE, ParleyHookSpecs
from parley.logging_utils import conversation_scope
from parley.state import FileStateStore, MemoryStateStore, StateStore
from parley.turn import Sender, TurnContext
from parley.types import TurnResult


class ParleyFramework:
    """Runs inbound activities through a ``DialogSet`` one turn at a time.

    Turns for the same conversation are serialized; different conversations run
    independently. Persistence and outbound delivery come from plugins.
    """

    def __init__(self, dialogs: DialogSet, settings: Settings | None = None) -> None:
        self.dialogs = dialogs
        self.settings = settings or Settings()
        self._plugin_manager = pluggy.PluginManager(PARLEY_HOOK_NAMESPACE)
        self._plugin_manager.add_hookspecs(ParleyHookSpecs)
        self._hook_runtime = HookRuntime(self._plugin_manager)
        # Conversation key -> (lock, number of turns holding or waiting for it).
        self._locks: dict[str, tuple[asyncio.Lock, int]] = {}
        self._failed_plugins: dict[str, str] = {}

    @property
    def failed_plugins(self) -> dict[str, str]:
        return dict(self._failed_plugins)

    def load_plugins(self, *, entry_points: bool = True) -> None:
        """Register builtin plugins, then any installed ``parley`` entry points."""

        self.register_plugin(StateStorePlugin(self._default_store()), name="builtin:state")
        if not entry_points:
            return
        try:
            self._plugin_manager.load_setuptools_entrypoints(PARLEY_HOOK_NAMESPACE)
        except Exception as exc:
            self._failed_plugins["entrypoints"] = str(exc)
            logger.opt(exception=True).warning("plugin.load_failed group={}", PARLEY_HOOK_NAMESPACE)

    def register_plugin(self, plugin: Any, name: str | None = None) -> None:
        """Register a plugin. Later registrations take precedence for first-result hooks."""

        self._plugin_manager.register(plugin, name=name)
        logger.debug("plugin.registered name={}", name or type(plugin).__name__)

    async def process_inbound(
        self,
        activity: Activity,
        dialog_id: str,
        options: Any = None,
        *,
        send: Sender | None = None,
    ) -> TurnResult:
        """Run one inbound activity and return the turn result.

        ``send`` receives outbound activities as the dialogs produce them and its
        failures abort the turn before state is saved. Outbound activities are
        dispatched through plugins once the new state has been saved.
        """

        try:
            key = await self._hook_runtime.call_first("resolve_conversation", message=activity)
            key = key or activity.conversation_key
            with conversation_scope(key):
                async with self._conversation_lock(key):
                    return await self._run_turn(activity, key, dialog_id, options, send)
        except Exception as exc:
            await self._hook_runtime.notify_error(stage="turn", error=exc, message=activity)
            raise

    async def handle_bus_once(
        self,
        bus: BusProtocol,
        dialog_id: str,
        options: Any = None,
        *,
        timeout_seconds: float | None = None,
    ) -> TurnResult | None:
        """Consume one inbound activity from the bus and publish its outbounds."""

        inbound = await bus.next_inbound(timeout_seconds=timeout_seconds)
        if inbound is None:
            return None
        result = await self.process_inbound(inbound, dialog_id, options)
        for outbound in result.outbounds:
            await bus.publish_outbound(outbound)
        return result

    def create_bus(self) -> BusProtocol:
        return MessageBus()

    def hook_report(self) -> dict[str, list[str]]:
        return self._hook_runtime.hook_report()

    async def _run_turn(
        self,
        activity: Activity,
        key: str,
        dialog_id: str,
        options: Any,
        send: Sender | None,
    ) -> TurnResult:
        sent: list[Activity] = []

        async def capture(outbound: Activity) -> Any:
            ack = await send(outbound) if send is not None else None
            sent.append(outbound)
            return ack

        # Store failures abort the turn rather than restarting the conversation.
        stored = await self._hook_runtime.call_first("load_state", strict=True, conversation_key=key)
        state = self.dialogs.load_state(stored)
        turn_context = TurnContext(activity, send=capture)
        dc = self.dialogs.create_context(turn_context, state)
        logger.info("turn.start type={} depth={}", activity.type, len(state.dialog_stack))

        turn = await run_dialog(dc, dialog_id, options)

        dumped = self.dialogs.dump_state(state)
        await self._hook_runtime.call_many("save_state", strict=True, conversation_key=key, state=dumped)
        outbounds = await self._render_outbounds(sent, key)
        for outbound in outbounds:
            await self._hook_runtime.call_many("dispatch_outbound", message=outbound)

        logger.info("turn.end status={} depth={} outbounds={}", turn.status, len(state.dialog_stack), len(outbounds))
        return TurnResult(
            conversation_key=key,
            status=turn.status,
            result=turn.result,
            stack_depth=len(state.dialog_stack),
            outbounds=outbounds,
        )

    async def _render_outbounds(self, sent: list[Activity], key: str) -> list[Activity]:
        rendered: list[Activity] = []
        for outbound in sent:
            replacement = await self._hook_runtime.call_first("render_outbound", message=outbound, conversation_key=key)
            rendered.append(replacement if isinstance(replacement, Activity) else outbound)
        return rendered

    @asynccontextmanager
    async def _conversation_lock(self, key: str) -> AsyncIterator[None]:
        lock, users = self._locks.get(key, (asyncio.Lock(), 0))
        self._locks[key] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[key]
            if users == 1:
                del self._locks[key]
            else:
                self._locks[key] = (lock, users - 1)

    def _default_store(self) -> StateStore:
        if self.settings.state_dir is not None:
            return FileStateStore(self.settings.state_dir)
        return MemoryStateStore()
