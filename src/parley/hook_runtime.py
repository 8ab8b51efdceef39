"""Hook execution runtime with per-plugin fault isolation."""

from __future__ import annotations

import inspect
from collections import Counter
from collections.abc import AsyncIterator
from typing import Any

import pluggy
from loguru import logger

from parley.activity import Activity


class HookRuntime:
    """Runs pluggy hooks so that one failing plugin never breaks a turn.

    Implementations are awaited when they return awaitables, so plugins may be
    written sync or async. A plugin that raises is reported through ``on_error``,
    counted in ``failures`` and treated as if it had returned nothing.
    """

    def __init__(self, plugin_manager: pluggy.PluginManager) -> None:
        self._plugin_manager = plugin_manager
        self.failures: Counter[str] = Counter()

    async def call_first(self, hook_name: str, *, strict: bool = False, **kwargs: Any) -> Any:
        """Return the first non-None value, latest registered plugin first.

        With ``strict`` a failing plugin is still reported, then its error is re-raised.
        """

        async for value in self._results(hook_name, kwargs, strict):
            if value is not None:
                return value
        return None

    async def call_many(self, hook_name: str, *, strict: bool = False, **kwargs: Any) -> list[Any]:
        return [value async for value in self._results(hook_name, kwargs, strict)]

    async def notify_error(self, *, stage: str, error: Exception, message: Activity | None) -> None:
        """Tell every ``on_error`` observer; observers that fail are only logged."""

        logger.debug("hook.error stage={} error={!r}", stage, error)
        payload = {"stage": stage, "error": error, "message": message}
        for impl in self._implementations("on_error"):
            try:
                await _settle(impl.function(**_select_kwargs(impl, payload)))
            except Exception:
                logger.opt(exception=True).warning("hook.on_error_failed stage={} plugin={}", stage, _name(impl))

    def hook_report(self) -> dict[str, list[str]]:
        """Map each hook to the plugins implementing it, in registration order."""

        report: dict[str, list[str]] = {}
        for hook_name in sorted(vars(self._plugin_manager.hook)):
            plugins = [_name(impl) for impl in reversed(self._implementations(hook_name))]
            if plugins:
                report[hook_name] = plugins
        return report

    async def _results(self, hook_name: str, kwargs: dict[str, Any], strict: bool) -> AsyncIterator[Any]:
        for impl in self._implementations(hook_name):
            try:
                value = await _settle(impl.function(**_select_kwargs(impl, kwargs)))
            except Exception as error:
                stage = f"{hook_name}:{_name(impl)}"
                self.failures[stage] += 1
                await self.notify_error(stage=stage, error=error, message=kwargs.get("message"))
                if strict:
                    raise
                continue
            yield value

    def _implementations(self, hook_name: str) -> list[Any]:
        caller = getattr(self._plugin_manager.hook, hook_name, None)
        if not isinstance(caller, pluggy.HookCaller):
            return []
        # pluggy lists implementations oldest first; later registrations win.
        return caller.get_hookimpls()[::-1]


async def _settle(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _select_kwargs(impl: Any, kwargs: dict[str, Any]) -> dict[str, Any]:
    return {name: kwargs[name] for name in impl.argnames if name in kwargs}


def _name(impl: Any) -> str:
    return impl.plugin_name or "<unknown>"
