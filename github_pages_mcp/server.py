"""Main MCP server implementation for GitHub Pages management."""

import asyncio
import json
import logging
import sys
from typing import Any, Optional

from mcp import Tool
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import CallToolResult, TextContent

from . import __version__
from .clients.github_client import GitHubClient
from .config.settings import ConfigurationError, Settings, load_settings
from .tools.pages_tools import PagesTools, ToolResponse

logger = logging.getLogger(__name__)

SERVER_NAME = "github-pages-mcp-server"


def to_call_tool_result(response: ToolResponse) -> CallToolResult:
    """Serialize an envelope as the MCP tool result."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(response.envelope, indent=2))],
        isError=response.is_error,
    )


class GitHubPagesMCPServer:
    """MCP Server exposing GitHub Pages tools."""

    def __init__(self, settings: Settings, client: Optional[Any] = None):
        """Initialize the MCP server.

        Args:
            settings: Loaded server settings
            client: GitHub client to use instead of building one from settings
        """
        self.settings = settings
        self.client = client if client is not None else GitHubClient(
            token=settings.github_token,
            base_url=settings.api_url,
            timeout=settings.timeout,
        )
        self.pages_tools = PagesTools(self.client)

        # Create MCP server instance
        self.server = Server(SERVER_NAME)

        # Register handlers
        self._register_handlers()

    def _register_handlers(self):
        """Register all MCP handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List all available tools."""
            return self.pages_tools.get_tools()

        # Arguments are validated by PagesTools, which reports every violation
        @self.server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: dict) -> CallToolResult:
            """Route tool calls to the Pages dispatcher."""
            response = await self.pages_tools.handle_tool(name, arguments)
            return to_call_tool_result(response)

    async def run(self):
        """Run the MCP server on stdio."""
        from mcp.server.stdio import stdio_server

        try:
            async with stdio_server() as (read_stream, write_stream):
                logger.info(f"{SERVER_NAME} running on stdio")
                await self.server.run(
                    read_stream,
                    write_stream,
                    InitializationOptions(
                        server_name=SERVER_NAME,
                        server_version=__version__,
                        capabilities=self.server.get_capabilities(
                            notification_options=NotificationOptions(),
                            experimental_capabilities={}
                        )
                    )
                )
        finally:
            await self.close()

    async def close(self):
        """Release the HTTP client."""
        if hasattr(self.client, "close"):
            await self.client.close()


def main():
    """Main entry point for the MCP server."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        # stdout carries the MCP stream
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    logging.basicConfig(level=settings.log_level_value, stream=sys.stderr)

    if not settings.has_token:
        logger.warning(
            "GITHUB_TOKEN environment variable not set. "
            "GitHub API calls will fail without authentication."
        )

    server = GitHubPagesMCPServer(settings)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
