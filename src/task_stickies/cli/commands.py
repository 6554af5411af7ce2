# src/task_stickies/cli/commands.py

"""
Tool registry: names, schemas, argument validation and dispatch.

Arguments arrive loosely typed (JSON objects from an agent, key=value
pairs from the console). They are validated into small request records
here, before anything touches the stores.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from ..core.errors import StoreError, ValidationFailure
from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_models import FilterStatus

logger = logging.getLogger(__name__)

DEFAULT_TOOL_PREFIX = "oscribble_"


@dataclass(frozen=True, slots=True)
class ToolResult:
    text: str
    is_error: bool = False


@dataclass(frozen=True, slots=True)
class NoArgs:
    pass


@dataclass(frozen=True, slots=True)
class ListTasksRequest:
    project_name: str
    filter_status: FilterStatus = FilterStatus.ALL


@dataclass(frozen=True, slots=True)
class TaskRefRequest:
    project_name: str
    task_id: str


@dataclass(frozen=True, slots=True)
class AddRawTaskRequest:
    project_name: str
    task_text: str


RequestParser = Callable[[dict[str, Any]], Any]
ToolRunner = Callable[[AppState, Any], Awaitable[str]]


@dataclass(frozen=True, slots=True)
class ToolSpec:
    name: str
    description: str
    input_schema: dict[str, Any]
    parse: RequestParser
    run: ToolRunner


# ---- argument validation ----


def _check_keys(args: dict[str, Any], allowed: set[str]) -> None:
    unknown = sorted(set(args) - allowed)
    if unknown:
        raise ValidationFailure(f"Unexpected argument(s): {', '.join(unknown)}")


def _require_str(args: dict[str, Any], key: str) -> str:
    value = args.get(key)
    if value is None:
        raise ValidationFailure(f"Missing required argument '{key}'")
    if not isinstance(value, str):
        raise ValidationFailure(f"Argument '{key}' must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValidationFailure(f"Argument '{key}' must not be empty")
    return value


def parse_no_args(args: dict[str, Any]) -> NoArgs:
    _check_keys(args, set())
    return NoArgs()


def parse_list_tasks(args: dict[str, Any]) -> ListTasksRequest:
    _check_keys(args, {"project_name", "filter_status"})
    raw_status = args.get("filter_status")
    if raw_status is not None and not isinstance(raw_status, str):
        raise ValidationFailure("Argument 'filter_status' must be a string")
    try:
        status = FilterStatus.from_raw(raw_status)
    except ValueError as e:
        allowed = ", ".join(s.value for s in FilterStatus)
        raise ValidationFailure(f"Invalid filter_status '{raw_status}' (expected one of: {allowed})") from e
    return ListTasksRequest(project_name=_require_str(args, "project_name"), filter_status=status)


def parse_task_ref(args: dict[str, Any]) -> TaskRefRequest:
    _check_keys(args, {"project_name", "task_id"})
    return TaskRefRequest(
        project_name=_require_str(args, "project_name"),
        task_id=_require_str(args, "task_id"),
    )


def parse_add_raw_task(args: dict[str, Any]) -> AddRawTaskRequest:
    _check_keys(args, {"project_name", "task_text"})
    return AddRawTaskRequest(
        project_name=_require_str(args, "project_name"),
        task_text=_require_str(args, "task_text"),
    )


# ---- registry ----


class ToolRegistry:
    """Tool table shared by the stdio server and the console (/list_tasks, ...)."""

    def __init__(self, prefix: str = "") -> None:
        self._prefix = prefix
        self._tools: dict[str, ToolSpec] = {}
        self._aliases: dict[str, str] = {}

    @property
    def prefix(self) -> str:
        return self._prefix

    def register(self, spec: ToolSpec) -> None:
        full = f"{self._prefix}{spec.name}"
        self._tools[full] = spec
        # Console users type the short name.
        self._aliases[spec.name] = full

    def tools(self) -> list[tuple[str, ToolSpec]]:
        return list(self._tools.items())

    def lookup(self, name: str) -> ToolSpec | None:
        spec = self._tools.get(name)
        if spec is None and name in self._aliases:
            spec = self._tools[self._aliases[name]]
        return spec

    async def dispatch(
        self, state: AppState, name: str, arguments: dict[str, Any] | None
    ) -> ToolResult:
        spec = self.lookup(name)
        if spec is None:
            return ToolResult(f"Error: Unknown tool: {name}", is_error=True)

        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            return ToolResult("Error: Tool arguments must be an object", is_error=True)

        try:
            request = spec.parse(arguments)
            text = await spec.run(state, request)
        except StoreError as e:
            logger.info("Tool %s failed: %s: %s", name, type(e).__name__, e)
            return ToolResult(f"Error: {e}", is_error=True)
        except Exception as e:
            logger.exception("Tool %s crashed.", name)
            return ToolResult(f"Error: {e}", is_error=True)

        logger.debug("Tool %s ok", name)
        return ToolResult(text)

    async def handle_line(self, state: AppState, line: str) -> str | None:
        """
        Handle a console line like "/list_tasks project_name=demo filter_status=checked".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Cannot parse command: {e}"
        if not parts:
            return "Empty command. Use /help to list available tools."

        name, rest = parts[0], parts[1:]
        if name in ("help", "h", "?"):
            return self.build_help()

        args: dict[str, Any] = {}
        for item in rest:
            key, sep, value = item.partition("=")
            if not sep or not key:
                return f"Arguments must look like key=value, got: {item}"
            args[key] = value

        result = await self.dispatch(state, name, args)
        return result.text

    def build_help(self) -> str:
        lines = ["Available tools:"]
        for short, full in self._aliases.items():
            spec = self._tools[full]
            params = " ".join(f"{p}=..." for p in spec.input_schema.get("properties", {}))
            lines.append(f"  /{short} {params}".rstrip() + f" - {spec.description}")
        return "\n".join(lines)


# ---- tool definitions ----

_PROJECT_NAME = {"type": "string", "description": "Name of the project"}


def _schema(properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required}


async def _run_list_projects(state: AppState, req: NoArgs) -> str:
    return await task_api.list_projects(state)


async def _run_list_tasks(state: AppState, req: ListTasksRequest) -> str:
    return await task_api.list_tasks(state, req.project_name, req.filter_status)


async def _run_complete(state: AppState, req: TaskRefRequest) -> str:
    return await task_api.set_task_checked(state, req.project_name, req.task_id, True)


async def _run_uncomplete(state: AppState, req: TaskRefRequest) -> str:
    return await task_api.set_task_checked(state, req.project_name, req.task_id, False)


async def _run_details(state: AppState, req: TaskRefRequest) -> str:
    return await task_api.get_task_details(state, req.project_name, req.task_id)


async def _run_add_raw(state: AppState, req: AddRawTaskRequest) -> str:
    return await task_api.add_raw_task(state, req.project_name, req.task_text)


def build_registry(prefix: str = DEFAULT_TOOL_PREFIX) -> ToolRegistry:
    reg = ToolRegistry(prefix=prefix)

    reg.register(
        ToolSpec(
            name="list_projects",
            description="List all projects with their names, paths, and last accessed timestamps",
            input_schema=_schema({}, []),
            parse=parse_no_args,
            run=_run_list_projects,
        )
    )
    reg.register(
        ToolSpec(
            name="list_tasks",
            description="List tasks from a project with optional status filtering",
            input_schema=_schema(
                {
                    "project_name": _PROJECT_NAME,
                    "filter_status": {
                        "type": "string",
                        "enum": [s.value for s in FilterStatus],
                        "description": "Filter tasks by completion status (default: all)",
                        "default": FilterStatus.ALL.value,
                    },
                },
                ["project_name"],
            ),
            parse=parse_list_tasks,
            run=_run_list_tasks,
        )
    )
    reg.register(
        ToolSpec(
            name="complete_task",
            description="Mark a task as complete in a project",
            input_schema=_schema(
                {
                    "project_name": _PROJECT_NAME,
                    "task_id": {"type": "string", "description": "UUID of the task to complete"},
                },
                ["project_name", "task_id"],
            ),
            parse=parse_task_ref,
            run=_run_complete,
        )
    )
    reg.register(
        ToolSpec(
            name="uncomplete_task",
            description="Mark a task as incomplete in a project",
            input_schema=_schema(
                {
                    "project_name": _PROJECT_NAME,
                    "task_id": {"type": "string", "description": "UUID of the task to uncomplete"},
                },
                ["project_name", "task_id"],
            ),
            parse=parse_task_ref,
            run=_run_uncomplete,
        )
    )
    reg.register(
        ToolSpec(
            name="get_task_details",
            description=(
                "Get detailed information about a specific task including metadata, notes, and blockers"
            ),
            input_schema=_schema(
                {
                    "project_name": _PROJECT_NAME,
                    "task_id": {"type": "string", "description": "UUID of the task"},
                },
                ["project_name", "task_id"],
            ),
            parse=parse_task_ref,
            run=_run_details,
        )
    )
    reg.register(
        ToolSpec(
            name="add_raw_task",
            description=(
                "Add raw task text to a project (formatted by the app the next time the project is opened)"
            ),
            input_schema=_schema(
                {
                    "project_name": _PROJECT_NAME,
                    "task_text": {"type": "string", "description": "Raw task text to append"},
                },
                ["project_name", "task_text"],
            ),
            parse=parse_add_raw_task,
            run=_run_add_raw,
        )
    )
    return reg
