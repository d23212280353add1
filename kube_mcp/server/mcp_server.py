"""
MCP server exposing the tool catalogue over stdio.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from .. import __version__
from ..dispatch import ToolDispatcher
from ..tools import list_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "kubernetes-mcp"


async def handle_call_tool(
    dispatcher: ToolDispatcher, name: str, arguments: Optional[Dict[str, Any]]
) -> CallToolResult:
    """
    Run one tool call off the event loop and wrap the response for MCP.

    kubectl is invoked with a blocking subprocess call, so each call runs in a
    worker thread; concurrent calls each get their own thread and process.
    """
    response = await asyncio.to_thread(dispatcher.call, name, arguments or {})
    return CallToolResult(
        content=[TextContent(type="text", text=response.text)],
        isError=response.is_error,
    )


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Create the MCP server with list_tools and call_tool handlers registered."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def _list_tools() -> List[Tool]:
        return [definition.to_tool() for definition in list_tools()]

    @server.call_tool()
    async def _call_tool(name: str, arguments: Dict[str, Any]) -> CallToolResult:
        return await handle_call_tool(dispatcher, name, arguments)

    return server


async def _serve(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_server(dispatcher: ToolDispatcher) -> None:
    """
    Probe the cluster and serve MCP requests on stdin/stdout until the client disconnects.

    A failed probe is logged and the server starts anyway.
    """
    connector = dispatcher.connector
    logger.info("Kubernetes MCP Server starting...")
    logger.info(f"Mode: {connector.describe()}")
    logger.info(f"Default namespace: {dispatcher.default_namespace}")

    if connector.connect():
        logger.info("kubectl connection successful")
    else:
        logger.warning("kubectl connectivity check failed; tool calls may fail")

    server = create_server(dispatcher)
    logger.info(f"Kubernetes MCP server running ({len(list_tools())} tools)")
    asyncio.run(_serve(server))
