"""Runtime logging helpers."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Literal

import loguru
from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "chat"]

DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {extra[conversation]} | {name}:{line} | {message}"

_conversation: ContextVar[str] = ContextVar("parley_conversation", default="-")
_active: tuple[LogProfile, str] | None = None


def current_conversation() -> str:
    """Conversation key of the turn being processed in this task."""

    return _conversation.get()


@contextmanager
def conversation_scope(key: str) -> Iterator[None]:
    """Tag every log record emitted inside the block with ``key``."""

    token = _conversation.set(key)
    try:
        yield
    finally:
        _conversation.reset(token)


def _sink_for(profile: LogProfile) -> dict[str, Any]:
    if profile == "chat":
        handler = RichHandler(console=get_console(), show_time=False, show_path=False, markup=False)
        return {"sink": handler, "format": "{extra[conversation]} | {message}"}
    return {"sink": sys.stderr, "format": DEFAULT_FORMAT}


def configure_logging(*, profile: LogProfile = "default", level: str = "INFO") -> None:
    """Point loguru at the sink for ``profile``; repeated calls with the same arguments are no-ops."""

    def tag_conversation(record: loguru.Record) -> None:
        record["extra"]["conversation"] = current_conversation()

    global _active
    wanted = (profile, level.upper())
    if wanted == _active:
        return

    logger.remove()
    logger.configure(patcher=tag_conversation)
    logger.add(level=wanted[1], backtrace=False, diagnose=False, **_sink_for(profile))
    _active = wanted
