from __future__ import annotations

from pathlib import Path

import pytest

from parley.state import FileStateStore, MemoryStateStore


@pytest.mark.asyncio
async def test_memory_store_returns_copies() -> None:
    store = MemoryStateStore()
    data = {"dialog_stack": [{"id": "confirm", "state": {"state": {}}}]}

    await store.save("test:convo1", data)
    data["dialog_stack"].clear()
    loaded = await store.load("test:convo1")
    assert loaded is not None
    loaded["dialog_stack"].append({"id": "other", "state": None})

    assert await store.load("test:convo1") == {"dialog_stack": [{"id": "confirm", "state": {"state": {}}}]}
    assert store.keys() == ["test:convo1"]


@pytest.mark.asyncio
async def test_memory_store_delete_and_missing_key() -> None:
    store = MemoryStateStore()
    await store.save("a", {"dialog_stack": []})

    await store.delete("a")
    await store.delete("never-saved")

    assert await store.load("a") is None


@pytest.mark.asyncio
async def test_file_store_round_trip_uses_quoted_file_names(tmp_path: Path) -> None:
    store = FileStateStore(tmp_path / "state")
    data = {"dialog_stack": [{"id": "name", "state": {"options": {"prompt": None}, "state": {"attempts": 2}}}]}

    await store.save("test:conv/1", data)

    path = store.path_for("test:conv/1")
    assert path.parent == tmp_path / "state"
    assert path.name == "test%3Aconv%2F1.json"
    assert path.exists()
    assert await store.load("test:conv/1") == data


@pytest.mark.asyncio
async def test_file_store_delete(tmp_path: Path) -> None:
    store = FileStateStore(tmp_path)
    await store.save("k", {"dialog_stack": []})

    await store.delete("k")
    await store.delete("k")

    assert not store.path_for("k").exists()
    assert await store.load("k") is None


@pytest.mark.asyncio
async def test_file_store_ignores_corrupt_documents(tmp_path: Path) -> None:
    store = FileStateStore(tmp_path)
    store.path_for("broken").write_text("{not json", encoding="utf-8")
    store.path_for("listy").write_text("[1, 2]", encoding="utf-8")

    assert await store.load("broken") is None
    assert await store.load("listy") is None
