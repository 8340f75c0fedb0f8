"""Tests for the MCP server wiring."""

import json

import pytest

from github_pages_mcp.clients.github_client import GitHubClient
from github_pages_mcp.config.settings import Settings
from github_pages_mcp.server import GitHubPagesMCPServer, to_call_tool_result
from github_pages_mcp.tools.pages_tools import ToolResponse


def test_call_tool_result_serialization():
    response = ToolResponse(envelope={"success": False, "error": "Unknown tool: x"}, is_error=True)

    result = to_call_tool_result(response)

    assert result.isError is True
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    assert json.loads(result.content[0].text) == response.envelope


def test_not_enabled_is_not_flagged():
    response = ToolResponse(
        envelope={"success": False, "error": "GitHub Pages is not enabled for this repository"},
        is_error=False,
    )

    assert to_call_tool_result(response).isError is False


def test_server_uses_injected_client(github):
    server = GitHubPagesMCPServer(Settings(), client=github)

    assert server.pages_tools.client is github
    assert len(server.pages_tools.get_tools()) == 5


@pytest.mark.asyncio
async def test_server_builds_client_from_settings():
    settings = Settings(github_token="ghp_x", api_url="https://github.example.com/api/v3", timeout=5.0)
    server = GitHubPagesMCPServer(settings)

    try:
        assert isinstance(server.client, GitHubClient)
        assert server.client.base_url == "https://github.example.com/api/v3"
        assert server.client.client.headers["Authorization"] == "Bearer ghp_x"
    finally:
        await server.close()


@pytest.mark.asyncio
async def test_dispatch_through_server(github):
    github.seed_site("octo", "site")
    server = GitHubPagesMCPServer(Settings(), client=github)

    response = await server.pages_tools.handle_tool(
        "get_github_pages_info", {"owner": "octo", "repo": "site"}
    )
    result = to_call_tool_result(response)

    payload = json.loads(result.content[0].text)
    assert payload["success"] is True
    assert payload["url"] == "https://octo.github.io/site/"
    assert result.isError is False
