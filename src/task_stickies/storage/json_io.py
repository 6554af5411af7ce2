# src/task_stickies/storage/json_io.py

"""
JSON file helpers: strict reads and torn-write-free atomic writes.

Atomic write procedure:
- write the serialized document to a randomly named temp file in the
  *same* directory as the target,
- fsync it,
- os.replace() it onto the target (same-directory rename is atomic on
  local filesystems; network mounts are not covered).

On failure the temp file is removed and the target is left exactly as it was.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
import secrets
from pathlib import Path
from typing import Any

from ..core.errors import IOFailure, NotFound, ParseFailure

logger = logging.getLogger(__name__)


def _temp_path_for(path: Path) -> Path:
    return path.parent / f".{secrets.token_hex(16)}.tmp"


def _write_atomic_sync(path: Path, payload: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = _temp_path_for(path)
    try:
        with open(tmp, "w", encoding="utf-8", newline="") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise


async def atomic_write_json(path: str | Path, data: Any) -> None:
    path = Path(path)
    try:
        payload = json.dumps(data, ensure_ascii=False, indent=2)
    except (TypeError, ValueError) as e:
        raise IOFailure(f"Cannot serialize document for {path}: {e}") from e

    try:
        await asyncio.to_thread(_write_atomic_sync, path, payload)
    except OSError as e:
        logger.warning("Atomic write failed path=%s err=%s", path, e)
        raise IOFailure(f"Failed to write {path}: {e.strerror or e}") from e

    logger.debug("Atomic write ok path=%s bytes=%d", path, len(payload))


def _read_text_sync(path: Path) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


async def read_json(path: str | Path, *, what: str = "file") -> Any:
    """
    Read and decode a JSON document.

    Raises NotFound if the file is absent, ParseFailure if it is not JSON,
    IOFailure for any other OS error.
    """
    path = Path(path)
    try:
        raw = await asyncio.to_thread(_read_text_sync, path)
    except FileNotFoundError as e:
        raise NotFound(f"{what} not found: {path}") from e
    except UnicodeDecodeError as e:
        raise ParseFailure(f"{what} is not valid UTF-8: {path}") from e
    except OSError as e:
        raise IOFailure(f"Failed to read {path}: {e.strerror or e}") from e

    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise ParseFailure(f"{what} is not valid JSON: {path} ({e})") from e
