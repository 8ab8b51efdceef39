"""Dialog state stores keyed by conversation."""

from __future__ import annotations

import asyncio
import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol
from urllib.parse import quote

from loguru import logger

type StateData = dict[str, Any]

STATE_FILE_SUFFIX = ".json"


class StateStore(Protocol):
    """Async key-value contract for persisted dialog stacks."""

    async def load(self, key: str) -> StateData | None: ...

    async def save(self, key: str, data: StateData) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryStateStore:
    """Keeps deep copies so callers never share objects with the store."""

    def __init__(self) -> None:
        self._data: dict[str, StateData] = {}

    async def load(self, key: str) -> StateData | None:
        data = self._data.get(key)
        return copy.deepcopy(data) if data is not None else None

    async def save(self, key: str, data: StateData) -> None:
        self._data[key] = copy.deepcopy(data)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class FileStateStore:
    """One JSON document per conversation under ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root.expanduser()

    def path_for(self, key: str) -> Path:
        return self.root / f"{quote(key, safe='')}{STATE_FILE_SUFFIX}"

    async def load(self, key: str) -> StateData | None:
        return await asyncio.to_thread(self._read, self.path_for(key))

    async def save(self, key: str, data: StateData) -> None:
        await asyncio.to_thread(self._write, self.path_for(key), data)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self.path_for(key).unlink, missing_ok=True)

    @staticmethod
    def _read(path: Path) -> StateData | None:
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("state.corrupt path={}", path)
            return None
        return payload if isinstance(payload, dict) else None

    def _write(self, path: Path, data: StateData) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=".state-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
