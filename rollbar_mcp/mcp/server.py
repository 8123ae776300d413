"""MCP server for Rollbar tools.

This server exposes the Rollbar REST API as tools via the Model Context
Protocol (MCP), over stdio.
"""

import asyncio
import logging
import sys
from typing import Any

import httpx
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from ..config import RollbarSettings, get_settings
from ..credentials import RollbarClients, select_tokens
from ..errors import ConfigurationError
from ..resolver import ProjectResolver
from ..utils.logger import setup_logging
from .handlers import ToolDispatcher
from .results import render_result
from .tools import get_tools

SERVER_NAME = "rollbar-mcp"

logger = logging.getLogger(__name__)


def list_tool_definitions() -> list[Tool]:
    """Build the MCP Tool objects for the catalogue.

    Returns:
        List of MCP Tool objects.
    """
    return [
        Tool(
            name=tool["name"],
            description=tool["description"],
            inputSchema=tool["inputSchema"],
        )
        for tool in get_tools()
    ]


async def handle_tool_call(
    dispatcher: ToolDispatcher, name: str, arguments: dict[str, Any] | None
) -> list[TextContent]:
    """Handle a tool call.

    Args:
        dispatcher: Tool dispatcher.
        name: Tool name.
        arguments: Tool arguments.

    Returns:
        List containing a single TextContent with the JSON result.
    """
    logger.info(f"Tool call: {name} with arguments: {arguments}")
    result = await dispatcher.invoke(name, arguments)
    return [TextContent(type="text", text=render_result(result))]


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Create the MCP server bound to a dispatcher.

    Args:
        dispatcher: Tool dispatcher used for every call.

    Returns:
        Configured MCP server.
    """
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return list_tool_definitions()

    # Arguments are validated by the dispatcher so errors keep one shape
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        return await handle_tool_call(dispatcher, name, arguments)

    return server


def build_dispatcher(
    settings: RollbarSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[ToolDispatcher, RollbarClients]:
    """Select access tokens and wire up the dispatcher.

    Args:
        settings: Server settings.
        transport: Optional httpx transport for the Rollbar clients.

    Returns:
        Tuple of (ToolDispatcher, RollbarClients). The caller closes the clients.

    Raises:
        ConfigurationError: If no access token is configured.
    """
    clients = select_tokens(settings, transport=transport)
    resolver = ProjectResolver(
        default_id=settings.project_id,
        default_name=settings.project_name or None,
        account_client=clients.account,
    )
    return ToolDispatcher(clients, resolver), clients


async def run_server(settings: RollbarSettings) -> None:
    """Run the MCP server over stdio."""
    dispatcher, clients = build_dispatcher(settings)
    server = create_server(dispatcher)
    logger.info("Rollbar MCP server running on stdio")

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await clients.aclose()


def main(log_level: str | None = None) -> None:
    """Main entry point for the rollbar-mcp-server command."""
    try:
        settings = get_settings()
        setup_logging(log_level or settings.log_level)
        asyncio.run(run_server(settings))
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
