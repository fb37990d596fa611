"""
MCP server: exposes the tool registry over stdio.

stdout carries the protocol, so logging goes to stderr.
"""

import asyncio
import logging
import sys
from typing import Any, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from giftcard_tools import __version__
from giftcard_tools.client import AsyncGiftCard
from giftcard_tools.config import Settings
from giftcard_tools.tools import ToolRegistry, registry as default_registry

logger = logging.getLogger(__name__)

SERVER_NAME = "giftcard"


class ToolCallError(Exception):
    """Raised inside call_tool so the protocol reports the result with isError."""


def build_server(client: AsyncGiftCard, registry: ToolRegistry = default_registry) -> Server:
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in registry.list_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Optional[dict[str, Any]]) -> list[types.TextContent]:
        result = await registry.call(client, name, arguments)
        if result.is_error:
            logger.warning("Tool %s returned an error: %s", name, result.text)
            raise ToolCallError(result.text)
        return [types.TextContent(type="text", text=result.text)]

    return server


async def serve(settings: Optional[Settings] = None) -> None:
    async with AsyncGiftCard(settings) as client:
        server = build_server(client)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("%s MCP server %s running on stdio", SERVER_NAME, __version__)
            await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(serve())


if __name__ == "__main__":
    main()
