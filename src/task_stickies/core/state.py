# src/task_stickies/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import NotesRepo, ProjectRepo, RawLog


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    registry: ProjectRepo
    notes: NotesRepo
    raw_log: RawLog
