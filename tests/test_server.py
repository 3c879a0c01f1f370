"""The FastMCP server wiring, exercised in-process with fake drivers."""

import json

import pytest
from mcp.server.fastmcp.exceptions import ToolError

import mcp_browser_sessions.__main__ as server


def content_of(result):
    # Newer SDKs return (content, structured_content)
    if isinstance(result, tuple):
        result = result[0]
    return list(result)


def test_all_tools_registered(event_loop):
    tools = event_loop.run_until_complete(server.mcp.list_tools())
    assert sorted(t.name for t in tools) == sorted([
        "navigate", "act", "extract", "observe", "screenshot", "get-url",
        "get-all-urls", "session-create", "session-close", "create-session",
        "list-sessions", "close-session", "navigate-session", "act-session",
        "extract-session", "observe-session", "get-url-session",
    ])


def test_input_schemas(event_loop):
    tools = {t.name: t for t in event_loop.run_until_complete(server.mcp.list_tools())}

    assert tools["close-session"].inputSchema["required"] == ["sessionId"]
    assert "sessionId" in tools["navigate-session"].inputSchema["properties"]
    assert tools["navigate"].inputSchema["required"] == ["url"]
    assert tools["navigate"].description.startswith("Navigate to a URL")


def test_call_through_server(context, event_loop):
    result = event_loop.run_until_complete(server.mcp.call_tool("create-session", {}))
    sid = json.loads(content_of(result)[0].text)["sessionId"]

    result = event_loop.run_until_complete(
        server.mcp.call_tool("navigate-session", {"sessionId": sid, "url": "https://example.com"})
    )
    assert content_of(result)[0].text == "Navigated to: https://example.com"

    result = event_loop.run_until_complete(server.mcp.call_tool("get-all-urls", {}))
    assert json.loads(content_of(result)[0].text) == {sid: "https://example.com"}


def test_errors_surface_as_tool_errors(context, event_loop):
    with pytest.raises(ToolError, match="Session not found: ghost"):
        event_loop.run_until_complete(server.mcp.call_tool("get-url-session", {"sessionId": "ghost"}))


def test_lifespan_closes_sessions(context, event_loop):
    async def scenario():
        async with server.lifespan(server.mcp):
            await context.registry.create()
            await context.get_default_session()
            assert len(context.registry) == 2
        return len(context.registry)

    assert event_loop.run_until_complete(scenario()) == 0
