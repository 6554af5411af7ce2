# src/task_stickies/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task API.

The API depends on Protocols instead of concrete stores, so tests can
swap in fakes (e.g. a notes store that fails on save).
"""

from pathlib import Path
from typing import Protocol

from ..tasks.task_models import NotesFile, ProjectSettings


class ProjectRepo(Protocol):
    async def list_projects(self) -> list[ProjectSettings]: ...
    async def resolve(self, name: str) -> Path: ...


class NotesRepo(Protocol):
    async def load(self, project_dir: str | Path) -> NotesFile: ...
    async def save(self, project_dir: str | Path, notes: NotesFile) -> None: ...


class RawLog(Protocol):
    async def append(self, project_dir: str | Path, text: str) -> None: ...
    async def read(self, project_dir: str | Path) -> str: ...
