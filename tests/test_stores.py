# tests/test_stores.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from task_stickies.core.errors import NotFound, ParseFailure
from task_stickies.storage.notes_store import NotesStore
from task_stickies.storage.raw_log import RawTaskLog
from task_stickies.storage.registry import ProjectRegistry

from .conftest import node, notes_doc, write_json


# ---- registry ----


@pytest.mark.asyncio
async def test_registry_resolve_is_exact_and_case_sensitive(storage_root: Path) -> None:
    write_json(storage_root / "projects.json", [{"name": "Demo", "path": "/x"}, {"name": "other"}])
    reg = ProjectRegistry(storage_root)

    assert await reg.resolve("Demo") == storage_root / "Demo"
    with pytest.raises(NotFound):
        await reg.resolve("demo")
    with pytest.raises(NotFound):
        await reg.resolve("Dem")


@pytest.mark.asyncio
async def test_registry_missing_file(storage_root: Path) -> None:
    reg = ProjectRegistry(storage_root)
    with pytest.raises(NotFound):
        await reg.list_projects()
    with pytest.raises(NotFound):
        await reg.resolve("anything")


@pytest.mark.asyncio
async def test_registry_is_read_fresh_every_call(storage_root: Path) -> None:
    reg = ProjectRegistry(storage_root)
    write_json(storage_root / "projects.json", [{"name": "one"}])
    assert [p.name for p in await reg.list_projects()] == ["one"]

    write_json(storage_root / "projects.json", [{"name": "one"}, {"name": "two"}])
    assert await reg.resolve("two") == storage_root / "two"


@pytest.mark.asyncio
async def test_registry_malformed(storage_root: Path) -> None:
    write_json(storage_root / "projects.json", {"name": "not-a-list"})
    with pytest.raises(ParseFailure):
        await ProjectRegistry(storage_root).list_projects()

    write_json(storage_root / "projects.json", [{"path": "/no/name"}])
    with pytest.raises(ParseFailure):
        await ProjectRegistry(storage_root).list_projects()


# ---- notes store ----


@pytest.mark.asyncio
async def test_notes_load_missing_is_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        await NotesStore().load(tmp_path / "nope")


@pytest.mark.parametrize(
    "payload",
    [
        "not json at all",
        json.dumps([1, 2, 3]),
        json.dumps({"tasks": {"id": "a"}}),
        json.dumps({"tasks": [{"text": "no id"}]}),
        json.dumps({"tasks": [{"id": "a", "checked": "yes"}]}),
        json.dumps({"tasks": [{"id": "a", "children": [{"id": "b", "metadata": []}]}]}),
    ],
)
@pytest.mark.asyncio
async def test_notes_load_malformed_is_parse_failure(tmp_path: Path, payload: str) -> None:
    (tmp_path / "notes.json").write_text(payload, "utf-8")
    with pytest.raises(ParseFailure):
        await NotesStore().load(tmp_path)


@pytest.mark.asyncio
async def test_notes_round_trip_preserves_content(tmp_path: Path) -> None:
    doc = notes_doc(
        [
            node(
                "a",
                metadata={
                    "priority": "feature",
                    "attempts": [{"timestamp": 1, "note": "tried"}],
                    "context_files": [{"path": "src/x.py", "wasGrepped": True}],
                },
                children=[node("b", checked=True, indent=1)],
            )
        ]
    )
    doc["last_formatted_raw"] = "- a\n  - b\n"
    doc["tasks"][0]["collapsed"] = True
    doc["app_specific"] = {"theme": "dark"}
    write_json(tmp_path / "notes.json", doc)

    store = NotesStore()
    await store.save(tmp_path, await store.load(tmp_path))

    assert json.loads((tmp_path / "notes.json").read_text("utf-8")) == doc


# ---- raw log ----


@pytest.mark.asyncio
async def test_raw_append_after_newline_terminated_content(tmp_path: Path) -> None:
    log = RawTaskLog()
    (tmp_path / "raw.txt").write_text("first\n", "utf-8")

    await log.append(tmp_path, "buy milk")
    assert await log.read(tmp_path) == "first\nbuy milk\n"

    await log.append(tmp_path, "buy milk")
    assert await log.read(tmp_path) == "first\nbuy milk\nbuy milk\n"


@pytest.mark.asyncio
async def test_raw_append_separates_unterminated_tail(tmp_path: Path) -> None:
    log = RawTaskLog()
    (tmp_path / "raw.txt").write_text("first", "utf-8")

    await log.append(tmp_path, "second\n")
    assert await log.read(tmp_path) == "first\nsecond\n"


@pytest.mark.asyncio
async def test_raw_append_creates_project_dir_lazily(tmp_path: Path) -> None:
    log = RawTaskLog()
    project_dir = tmp_path / "new-project"
    with pytest.raises(NotFound):
        await log.read(project_dir)

    await log.append(project_dir, "hello")
    assert (project_dir / "raw.txt").read_text("utf-8") == "hello\n"


@pytest.mark.asyncio
async def test_raw_append_to_empty_file_has_no_leading_newline(tmp_path: Path) -> None:
    log = RawTaskLog()
    (tmp_path / "raw.txt").write_text("", "utf-8")
    await log.append(tmp_path, "x")
    assert await log.read(tmp_path) == "x\n"


@pytest.mark.parametrize(
    "doc",
    [
        {"tasks": [node("a")]},
        {"version": 2, "project_path": "/code/demo", "tasks": [node("a")]},
        {"version": "1.0.0", "project_path": None, "last_modified": None, "tasks": [node("a")]},
        {"version": {"major": 1}, "tasks": [], "last_formatted_raw": None},
    ],
    ids=["absent-keys", "numeric-version", "null-values", "object-version"],
)
@pytest.mark.asyncio
async def test_notes_round_trip_keeps_header_fields_as_loaded(tmp_path: Path, doc: dict) -> None:
    write_json(tmp_path / "notes.json", doc)

    store = NotesStore()
    await store.save(tmp_path, await store.load(tmp_path))

    assert json.loads((tmp_path / "notes.json").read_text("utf-8")) == doc
