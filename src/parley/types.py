"""Framework-neutral result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from parley.activity import Activity
from parley.dialogs.base import DialogTurnStatus


@dataclass(frozen=True)
class TurnResult:
    """Result of one complete inbound turn."""

    conversation_key: str
    status: DialogTurnStatus
    result: Any = None
    stack_depth: int = 0
    outbounds: list[Activity] = field(default_factory=list)
