# src/task_stickies/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it takes settings once and wires
the concrete stores into AppState. The storage root is injected here and
nowhere else.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.notes_store import NotesStore
from ..storage.raw_log import RawTaskLog
from ..storage.registry import ProjectRegistry

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    state = AppState(
        settings=settings,
        registry=ProjectRegistry(settings.storage_root),
        notes=NotesStore(),
        raw_log=RawTaskLog(),
    )
    logger.info("State ready storage_root=%s", settings.storage_root)
    return state
