# src/task_stickies/storage/raw_log.py

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from ..core.errors import IOFailure, NotFound

logger = logging.getLogger(__name__)

RAW_FILENAME = "raw.txt"


def _ends_without_newline(path: Path) -> bool:
    """True if `path` exists, is non-empty and its last byte is not a newline."""
    try:
        with open(path, "rb") as f:
            f.seek(0, os.SEEK_END)
            if f.tell() == 0:
                return False
            f.seek(-1, os.SEEK_END)
            return f.read(1) != b"\n"
    except FileNotFoundError:
        return False


def _append_sync(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    content = text if text.endswith("\n") else text + "\n"
    if _ends_without_newline(path):
        content = "\n" + content
    with open(path, "a", encoding="utf-8", newline="") as f:
        f.write(content)


def _read_sync(path: Path) -> str:
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


class RawTaskLog:
    """
    Append-only raw.txt per project, consumed later by the companion app's formatter.

    Appends are plain O_APPEND writes, not atomic renames: concurrent
    appenders may interleave at write() granularity.
    """

    @staticmethod
    def raw_path(project_dir: str | Path) -> Path:
        return Path(project_dir) / RAW_FILENAME

    async def append(self, project_dir: str | Path, text: str) -> None:
        path = self.raw_path(project_dir)
        try:
            await asyncio.to_thread(_append_sync, path, text)
        except OSError as e:
            raise IOFailure(f"Failed to append to {path}: {e.strerror or e}") from e
        logger.info("Raw task appended path=%s chars=%d", path, len(text))

    async def read(self, project_dir: str | Path) -> str:
        path = self.raw_path(project_dir)
        try:
            return await asyncio.to_thread(_read_sync, path)
        except FileNotFoundError as e:
            raise NotFound(f"Raw task file not found: {path}") from e
        except OSError as e:
            raise IOFailure(f"Failed to read {path}: {e.strerror or e}") from e
