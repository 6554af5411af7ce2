# src/task_stickies/connectors/mcp_connector.py

"""
Stdio tool server for agents.

Framing and capability negotiation are handled by the `mcp` SDK; this
module only maps the registry onto list_tools / call_tool.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from ..cli.commands import ToolRegistry
from ..core.state import AppState

logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """Raised from call_tool so the SDK reports the text with isError set."""


def build_server(state: AppState, registry: ToolRegistry, *, name: str, version: str) -> Server:
    server: Server = Server(name, version=version)

    # The SDK may run handlers concurrently; requests are serialized so each
    # load -> mutate -> save cycle completes before the next one starts.
    lock = asyncio.Lock()

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=full, description=spec.description, inputSchema=spec.input_schema)
            for full, spec in registry.tools()
        ]

    @server.call_tool()
    async def _call_tool(tool_name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        logger.debug("call_tool name=%s", tool_name)
        async with lock:
            result = await registry.dispatch(state, tool_name, arguments)
        if result.is_error:
            raise ToolCallError(result.text)
        return [types.TextContent(type="text", text=result.text)]

    return server


async def run_stdio_server(state: AppState, registry: ToolRegistry, *, name: str, version: str) -> None:
    server = build_server(state, registry, name=name, version=version)
    logger.info("Stdio tool server started name=%s tools=%d", name, len(registry.tools()))
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("Stdio tool server finished.")
