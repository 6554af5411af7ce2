# src/task_stickies/storage/registry.py

from __future__ import annotations

import logging
from pathlib import Path

from ..core.errors import NotFound, ParseFailure
from ..tasks.task_models import ProjectSettings
from .json_io import read_json

logger = logging.getLogger(__name__)

PROJECTS_FILENAME = "projects.json"


class ProjectRegistry:
    """
    Read-only view of projects.json under the storage root.

    Nothing is cached: every call re-reads the file, so edits made by the
    companion app (new projects, last_accessed bumps) show up immediately.
    """

    def __init__(self, storage_root: str | Path) -> None:
        self._root = Path(storage_root).expanduser()
        self._projects_file = self._root / PROJECTS_FILENAME

    @property
    def storage_root(self) -> Path:
        return self._root

    @property
    def projects_file(self) -> Path:
        return self._projects_file

    async def list_projects(self) -> list[ProjectSettings]:
        """Raises NotFound if projects.json does not exist yet."""
        data = await read_json(self._projects_file, what="Projects file")
        if data is None:
            return []
        if not isinstance(data, list):
            raise ParseFailure(f"Projects file must be a JSON array: {self._projects_file}")
        return [ProjectSettings.from_dict(p) for p in data]

    async def resolve(self, name: str) -> Path:
        """Exact, case-sensitive lookup of `name`; returns the project's data directory."""
        try:
            projects = await self.list_projects()
        except NotFound as e:
            raise NotFound(f"Project '{name}' not found (no projects file yet)") from e

        for project in projects:
            if project.name == name:
                path = self._root / name
                logger.debug("Resolved project name=%s dir=%s", name, path)
                return path
        raise NotFound(f"Project '{name}' not found")
