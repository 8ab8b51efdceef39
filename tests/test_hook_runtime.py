from __future__ import annotations

import pluggy
import pytest

from parley.activity import Activity
from parley.hook_runtime import HookRuntime
from parley.hookspecs import PARLEY_HOOK_NAMESPACE, ParleyHookSpecs, hookimpl


def _runtime(*plugins: tuple[str, object]) -> HookRuntime:
    manager = pluggy.PluginManager(PARLEY_HOOK_NAMESPACE)
    manager.add_hookspecs(ParleyHookSpecs)
    for name, plugin in plugins:
        manager.register(plugin, name=name)
    return HookRuntime(manager)


class SyncKey:
    @hookimpl
    def resolve_conversation(self, message: Activity) -> str | None:
        return f"sync:{message.conversation_id}"


class AsyncKey:
    @hookimpl
    async def resolve_conversation(self, message: Activity) -> str | None:
        return f"async:{message.conversation_id}"


class NoKey:
    @hookimpl
    def resolve_conversation(self, message: Activity) -> str | None:
        return None


class Exploding:
    @hookimpl
    def resolve_conversation(self, message: Activity) -> str | None:
        raise ValueError("boom")

    @hookimpl
    def dispatch_outbound(self, message: Activity) -> bool | None:
        raise ValueError("boom")


class Delivered:
    @hookimpl
    async def dispatch_outbound(self, message: Activity) -> bool | None:
        return True


class Observer:
    def __init__(self) -> None:
        self.stages: list[str] = []

    @hookimpl
    def on_error(self, stage: str, error: Exception, message: Activity | None) -> None:
        self.stages.append(stage)


class BrokenObserver:
    @hookimpl
    async def on_error(self, stage: str, error: Exception, message: Activity | None) -> None:
        raise RuntimeError("observer down")


@pytest.mark.asyncio
async def test_call_first_prefers_latest_registration_and_awaits_async_plugins() -> None:
    runtime = _runtime(("sync", SyncKey()), ("async", AsyncKey()), ("none", NoKey()))

    key = await runtime.call_first("resolve_conversation", message=Activity(conversation_id="c1"))

    assert key == "async:c1"


@pytest.mark.asyncio
async def test_failing_plugin_is_reported_and_skipped() -> None:
    observer = Observer()
    runtime = _runtime(("observer", observer), ("sync", SyncKey()), ("exploding", Exploding()))

    key = await runtime.call_first("resolve_conversation", message=Activity(conversation_id="c1"))

    assert key == "sync:c1"
    assert observer.stages == ["resolve_conversation:exploding"]
    assert runtime.failures["resolve_conversation:exploding"] == 1


@pytest.mark.asyncio
async def test_call_many_collects_successful_values() -> None:
    runtime = _runtime(("delivered", Delivered()), ("exploding", Exploding()))

    results = await runtime.call_many("dispatch_outbound", message=Activity(text="hello"))

    assert results == [True]


@pytest.mark.asyncio
async def test_broken_error_observer_is_swallowed() -> None:
    observer = Observer()
    runtime = _runtime(("observer", observer), ("broken", BrokenObserver()))

    await runtime.notify_error(stage="turn", error=RuntimeError("x"), message=None)

    assert observer.stages == ["turn"]


@pytest.mark.asyncio
async def test_unknown_hook_has_no_implementations() -> None:
    runtime = _runtime(("sync", SyncKey()))

    assert await runtime.call_first("not_a_hook") is None
    assert await runtime.call_many("not_a_hook") == []


def test_hook_report_lists_plugins_in_registration_order() -> None:
    runtime = _runtime(("sync", SyncKey()), ("async", AsyncKey()), ("delivered", Delivered()))

    assert runtime.hook_report() == {
        "dispatch_outbound": ["delivered"],
        "resolve_conversation": ["sync", "async"],
    }


@pytest.mark.asyncio
async def test_strict_call_reports_then_reraises() -> None:
    observer = Observer()
    runtime = _runtime(("observer", observer), ("sync", SyncKey()), ("exploding", Exploding()))

    with pytest.raises(ValueError, match="boom"):
        await runtime.call_first("resolve_conversation", strict=True, message=Activity(conversation_id="c1"))
    with pytest.raises(ValueError, match="boom"):
        await runtime.call_many("dispatch_outbound", strict=True, message=Activity(text="hello"))

    assert observer.stages == ["resolve_conversation:exploding", "dispatch_outbound:exploding"]
