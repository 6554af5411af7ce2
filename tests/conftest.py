# tests/conftest.py

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from task_stickies.cli.bootstrap import create_initial_state
from task_stickies.cli.commands import ToolRegistry, build_registry
from task_stickies.core.state import AppState


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), "utf-8")


def node(
    task_id: str,
    *,
    checked: bool = False,
    text: str | None = None,
    children: list[dict[str, Any]] | None = None,
    indent: int = 0,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Raw (on-disk shape) task node."""
    out: dict[str, Any] = {
        "id": task_id,
        "text": text if text is not None else f"task {task_id}",
        "checked": checked,
        "indent": indent,
        "children": children or [],
    }
    if metadata is not None:
        out["metadata"] = metadata
    return out


def notes_doc(tasks: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "version": "1.0.0",
        "project_path": "/home/me/code/demo",
        "last_modified": 1700000000000,
        "tasks": tasks,
    }


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="oscribble",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        storage_root=tmp_path / "stickies",
        tool_prefix="oscribble_",
        console_enabled=False,
    )


@pytest.fixture()
def storage_root(settings: SimpleNamespace) -> Path:
    return settings.storage_root


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState wired with the real file-backed stores under tmp_path."""
    return create_initial_state(settings=settings)


@pytest.fixture()
def registry(settings: SimpleNamespace) -> ToolRegistry:
    return build_registry(settings.tool_prefix)


@pytest.fixture()
def demo_project(storage_root: Path) -> Path:
    """
    A registered project 'demo' with this forest:

        a (unchecked)
          b (checked)
          c (unchecked)
            d (unchecked)
        e (checked)
    """
    write_json(
        storage_root / "projects.json",
        [{"name": "demo", "path": "/home/me/code/demo", "created": 1, "last_accessed": 2}],
    )
    tasks = [
        node(
            "a",
            text="Ship release",
            metadata={"priority": "critical", "blocked_by": ["e"], "notes": "waiting on CI"},
            children=[
                node("b", checked=True, indent=1, text="Write changelog"),
                node("c", indent=1, children=[node("d", indent=2)]),
            ],
        ),
        node("e", checked=True, text="Fix CI"),
    ]
    project_dir = storage_root / "demo"
    write_json(project_dir / "notes.json", notes_doc(tasks))
    return project_dir
