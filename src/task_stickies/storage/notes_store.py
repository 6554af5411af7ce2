# src/task_stickies/storage/notes_store.py

from __future__ import annotations

import logging
from pathlib import Path

from ..core.errors import NotFound, ParseFailure
from ..tasks.task_models import NotesFile
from .json_io import atomic_write_json, read_json

logger = logging.getLogger(__name__)

NOTES_FILENAME = "notes.json"


class NotesStore:
    """
    Whole-document store for a project's task forest (notes.json).

    There is no patch API: callers load the entire document, mutate it in
    memory and save it back. Concurrent writers are last-write-wins.
    """

    @staticmethod
    def notes_path(project_dir: str | Path) -> Path:
        return Path(project_dir) / NOTES_FILENAME

    async def load(self, project_dir: str | Path) -> NotesFile:
        path = self.notes_path(project_dir)
        try:
            data = await read_json(path, what="Notes file")
        except NotFound as e:
            raise NotFound(f"Notes file not found: {path}") from e

        try:
            notes = NotesFile.from_dict(data)
        except RecursionError as e:
            raise ParseFailure(f"Notes file is nested too deeply: {path}") from e

        logger.debug("Notes loaded path=%s top_level=%d", path, len(notes.tasks))
        return notes

    async def save(self, project_dir: str | Path, notes: NotesFile) -> None:
        path = self.notes_path(project_dir)
        await atomic_write_json(path, notes.to_dict())
        logger.info("Notes saved path=%s top_level=%d", path, len(notes.tasks))
