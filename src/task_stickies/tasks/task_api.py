# src/task_stickies/tasks/task_api.py

"""
Operations exposed to the controlling caller (agent tools / console).

Each call is a full resolve -> load -> (mutate -> save) cycle; nothing is
kept in memory between calls. Failures are raised as StoreError subclasses
and turned into error results by the dispatcher.
"""

from __future__ import annotations

import logging

from ..core.errors import NotFound
from ..core.state import AppState
from .render import render_project_list, render_task_details, render_task_list
from .task_models import FilterStatus
from .tree import filter_tasks, require_task, status_predicate

logger = logging.getLogger(__name__)


async def list_projects(state: AppState) -> str:
    try:
        projects = await state.registry.list_projects()
    except NotFound:
        return "No projects found. The projects file doesn't exist yet."

    if not projects:
        return "No projects found."
    return render_project_list(projects)


async def list_tasks(
    state: AppState, project_name: str, status: FilterStatus = FilterStatus.ALL
) -> str:
    project_dir = await state.registry.resolve(project_name)
    try:
        notes = await state.notes.load(project_dir)
    except NotFound:
        return f"No tasks found for project '{project_name}'. The notes file doesn't exist yet."

    tasks = notes.tasks
    if not tasks:
        return f"No tasks found in project '{project_name}'."

    if status is not FilterStatus.ALL:
        tasks = filter_tasks(tasks, status_predicate(status))
    if not tasks:
        return f"No {status.value} tasks found in project '{project_name}'."

    return render_task_list(project_name, status, tasks)


async def set_task_checked(state: AppState, project_name: str, task_id: str, checked: bool) -> str:
    """Locate `task_id`, set its checked flag and persist the whole document."""
    project_dir = await state.registry.resolve(project_name)
    notes = await state.notes.load(project_dir)

    try:
        task, _siblings = require_task(notes.tasks, task_id)
    except NotFound as e:
        raise NotFound(f"Task with ID '{task_id}' not found in project '{project_name}'") from e

    task.checked = checked
    await state.notes.save(project_dir, notes)

    verb = "completed" if checked else "uncompleted"
    logger.info("Task %s project=%s id=%s", verb, project_name, task_id)
    return f"✓ Task '{task.text}' {verb} successfully in project '{project_name}'."


async def get_task_details(state: AppState, project_name: str, task_id: str) -> str:
    project_dir = await state.registry.resolve(project_name)
    notes = await state.notes.load(project_dir)

    try:
        task, _siblings = require_task(notes.tasks, task_id)
    except NotFound as e:
        raise NotFound(f"Task with ID '{task_id}' not found in project '{project_name}'") from e

    return render_task_details(task)


async def add_raw_task(state: AppState, project_name: str, task_text: str) -> str:
    project_dir = await state.registry.resolve(project_name)
    await state.raw_log.append(project_dir, task_text)
    return (
        f"✓ Added raw task to project '{project_name}'. "
        "It will be formatted next time the project is opened in the app."
    )
