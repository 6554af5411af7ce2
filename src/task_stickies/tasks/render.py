# src/task_stickies/tasks/render.py

"""Human-readable (markdown-ish) rendering of projects and task trees."""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from .task_models import FilterStatus, ProjectSettings, TaskNode

INDENT = "  "


def format_timestamp(ms: float | None) -> str:
    """Epoch milliseconds -> local 'YYYY-MM-DD HH:MM:SS'."""
    if ms is None:
        return "Never"
    if not math.isfinite(ms):
        return str(ms)
    try:
        return datetime.fromtimestamp(ms / 1000.0).astimezone().strftime("%Y-%m-%d %H:%M:%S")
    except (OverflowError, OSError, ValueError):
        return str(ms)


def format_duration(ms: Any) -> str:
    if isinstance(ms, bool) or not isinstance(ms, (int, float)) or not math.isfinite(ms) or ms < 0:
        return str(ms)
    total = int(ms // 1000)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes:02d}m {seconds:02d}s"
    if minutes:
        return f"{minutes}m {seconds:02d}s"
    return f"{seconds}s"


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v) for v in value if v is not None and str(v) != ""]
    s = str(value)
    return [s] if s else []


def _metadata(node: TaskNode) -> dict[str, Any]:
    return node.metadata or {}


def _status_mark(node: TaskNode) -> str:
    return "☑" if node.checked else "☐"


def _task_lines(node: TaskNode, depth: int) -> list[str]:
    prefix = INDENT * depth
    meta = _metadata(node)

    priority = meta.get("priority")
    priority_str = f" [{str(priority).upper()}]" if priority else ""

    lines = [f"{prefix}{_status_mark(node)} {node.text}{priority_str} (ID: {node.id})"]

    blocked_by = _as_list(meta.get("blocked_by"))
    if blocked_by:
        lines.append(f"{prefix}  ⚠️  Blocked by: {', '.join(blocked_by)}")

    for note in _as_list(meta.get("notes")):
        lines.append(f"{prefix}  📝 {note}")

    return lines


def format_task(node: TaskNode, depth: int = 0) -> str:
    """Render `node` and its whole subtree, two spaces per nesting level."""
    lines: list[str] = []
    stack: list[tuple[TaskNode, int]] = [(node, depth)]
    while stack:
        current, d = stack.pop()
        lines.extend(_task_lines(current, d))
        for child in reversed(current.children):
            stack.append((child, d + 1))
    return "\n".join(lines)


def render_project_list(projects: Iterable[ProjectSettings]) -> str:
    ordered = sorted(projects, key=lambda p: p.last_accessed or 0, reverse=True)
    out = ["**Projects:**", ""]
    for project in ordered:
        out.append(f"- **{project.name}**")
        out.append(f"  - Path: `{project.path or 'N/A'}`")
        out.append(f"  - Last accessed: {format_timestamp(project.last_accessed)}")
        out.append("")
    return "\n".join(out)


def render_task_list(project_name: str, status: FilterStatus, tasks: list[TaskNode]) -> str:
    out = [f"**Tasks in '{project_name}' (filter: {status.value}):**", ""]
    for task in tasks:
        out.append(format_task(task))
        out.append("")
    return "\n".join(out)


def render_task_details(node: TaskNode) -> str:
    meta = _metadata(node)

    out = ["**Task Details:**", ""]
    out.append(f"**ID:** `{node.id}`")
    out.append(f"**Text:** {node.text}")
    out.append(f"**Status:** {'☑ Completed' if node.checked else '☐ Incomplete'}")

    if meta.get("priority"):
        out.append(f"**Priority:** {str(meta['priority']).upper()}")

    for key, label in (
        ("blocked_by", "Blocked by"),
        ("depends_on", "Depends on"),
        ("related_to", "Related to"),
        ("tags", "Tags"),
    ):
        values = _as_list(meta.get(key))
        if values:
            out.append(f"**{label}:** {', '.join(values)}")

    if meta.get("deadline"):
        out.append(f"**Deadline:** {meta['deadline']}")
    if meta.get("effort_estimate"):
        out.append(f"**Effort estimate:** {meta['effort_estimate']}")

    notes = _as_list(meta.get("notes"))
    if len(notes) == 1:
        out.append(f"**Notes:** {notes[0]}")
    elif notes:
        out.append("**Notes:**")
        out.extend(f"- {n}" for n in notes)

    start_time = meta.get("start_time")
    if isinstance(start_time, (int, float)) and not isinstance(start_time, bool):
        out.append(f"**Started:** {format_timestamp(start_time)}")
    if meta.get("duration") is not None:
        out.append(f"**Duration:** {format_duration(meta['duration'])}")

    context_files = meta.get("context_files")
    if isinstance(context_files, list) and context_files:
        paths = [str(cf.get("path")) for cf in context_files if isinstance(cf, dict) and cf.get("path")]
        if paths:
            out.append(f"**Context files:** {', '.join(paths)}")

    attempts = meta.get("attempts")
    if isinstance(attempts, list) and attempts:
        out.append(f"**Attempts ({len(attempts)}):**")
        for attempt in attempts:
            if not isinstance(attempt, dict):
                continue
            ts = attempt.get("timestamp")
            when = format_timestamp(ts) if isinstance(ts, (int, float)) and not isinstance(ts, bool) else "?"
            out.append(f"- [{when}] {attempt.get('note', '')}")

    if node.children:
        out.append("")
        out.append(f"**Children ({len(node.children)}):**")
        out.append("")
        for child in node.children:
            out.append(format_task(child, 1))

    return "\n".join(out)
