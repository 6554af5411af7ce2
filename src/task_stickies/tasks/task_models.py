# src/task_stickies/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ..core.errors import ParseFailure

_NODE_KEYS = frozenset({"id", "text", "checked", "indent", "children", "metadata"})
_NOTES_KEYS = frozenset({"version", "project_path", "last_modified", "tasks", "last_formatted_raw"})
_PROJECT_KEYS = frozenset({"name", "path", "created", "last_accessed"})


class _Missing:
    """Marks a document key that was absent on load (and stays absent on save)."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class FilterStatus(StrEnum):
    """Status filter accepted by list_tasks."""

    ALL = "all"
    CHECKED = "checked"
    UNCHECKED = "unchecked"

    @classmethod
    def from_raw(cls, raw: str | None) -> FilterStatus:
        if raw is None or raw == "":
            return cls.ALL
        return cls(raw)


def _extra(raw: dict[str, Any], known: frozenset[str]) -> dict[str, Any]:
    return {k: v for k, v in raw.items() if k not in known}


def _timestamp(raw: Any, what: str) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ParseFailure(f"{what} must be a number, got {type(raw).__name__}")
    return raw


@dataclass(slots=True)
class TaskNode:
    id: str
    text: str
    checked: bool
    indent: int
    children: list[TaskNode] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    # Keys we do not know about; written back untouched.
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> TaskNode:
        if not isinstance(raw, dict):
            raise ParseFailure(f"task node must be an object, got {type(raw).__name__}")

        node_id = raw.get("id")
        if not isinstance(node_id, str):
            raise ParseFailure("task node is missing a string 'id'")

        text = raw.get("text", "")
        if not isinstance(text, str):
            raise ParseFailure(f"task {node_id}: 'text' must be a string")

        checked = raw.get("checked", False)
        if not isinstance(checked, bool):
            raise ParseFailure(f"task {node_id}: 'checked' must be a boolean")

        indent = raw.get("indent", 0)
        if isinstance(indent, bool) or not isinstance(indent, int):
            raise ParseFailure(f"task {node_id}: 'indent' must be an integer")

        children_raw = raw.get("children", [])
        if children_raw is None:
            children_raw = []
        if not isinstance(children_raw, list):
            raise ParseFailure(f"task {node_id}: 'children' must be an array")

        metadata = raw.get("metadata")
        if metadata is not None and not isinstance(metadata, dict):
            raise ParseFailure(f"task {node_id}: 'metadata' must be an object")

        return cls(
            id=node_id,
            text=text,
            checked=checked,
            indent=indent,
            children=[cls.from_dict(c) for c in children_raw],
            metadata=metadata,
            extra=_extra(raw, _NODE_KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "checked": self.checked,
            "indent": self.indent,
            "children": [c.to_dict() for c in self.children],
        }
        if self.metadata is not None:
            out["metadata"] = self.metadata
        out.update(self.extra)
        return out


@dataclass(slots=True)
class NotesFile:
    """The single document persisted per project (notes.json)."""

    # Opaque to this layer: kept as loaded (any JSON value, or MISSING).
    version: Any
    project_path: Any
    last_modified: Any
    tasks: list[TaskNode] = field(default_factory=list)
    last_formatted_raw: Any = MISSING
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> NotesFile:
        if not isinstance(raw, dict):
            raise ParseFailure(f"notes document must be an object, got {type(raw).__name__}")

        tasks_raw = raw.get("tasks", [])
        if tasks_raw is None:
            tasks_raw = []
        if not isinstance(tasks_raw, list):
            raise ParseFailure("notes document: 'tasks' must be an array")

        last_formatted_raw = raw.get("last_formatted_raw", MISSING)
        if last_formatted_raw is not MISSING and last_formatted_raw is not None and not isinstance(
            last_formatted_raw, str
        ):
            raise ParseFailure("notes document: 'last_formatted_raw' must be a string")

        return cls(
            version=raw.get("version", MISSING),
            project_path=raw.get("project_path", MISSING),
            last_modified=(
                _timestamp(raw["last_modified"], "last_modified") if "last_modified" in raw else MISSING
            ),
            tasks=[TaskNode.from_dict(t) for t in tasks_raw],
            last_formatted_raw=last_formatted_raw,
            extra=_extra(raw, _NOTES_KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.version is not MISSING:
            out["version"] = self.version
        if self.project_path is not MISSING:
            out["project_path"] = self.project_path
        out["tasks"] = [t.to_dict() for t in self.tasks]
        if self.last_modified is not MISSING:
            out["last_modified"] = self.last_modified
        if self.last_formatted_raw is not MISSING:
            out["last_formatted_raw"] = self.last_formatted_raw
        out.update(self.extra)
        return out


@dataclass(slots=True)
class ProjectSettings:
    name: str
    path: str | None
    created: float | None
    last_accessed: float | None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> ProjectSettings:
        if not isinstance(raw, dict):
            raise ParseFailure(f"project entry must be an object, got {type(raw).__name__}")
        name = raw.get("name")
        if not isinstance(name, str):
            raise ParseFailure("project entry is missing a string 'name'")
        path = raw.get("path")
        return cls(
            name=name,
            path=path if isinstance(path, str) else None,
            created=_timestamp(raw.get("created"), f"project {name}: created"),
            last_accessed=_timestamp(raw.get("last_accessed"), f"project {name}: last_accessed"),
            extra=_extra(raw, _PROJECT_KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        for key in ("path", "created", "last_accessed"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        out.update(self.extra)
        return out
