#region Overview
"""
MCP server exposing browser sessions as tools.

## Single-session mode

Tools like `navigate`, `act`, `extract` and `get-url` work on the default
session. It is started lazily by the first call that needs it and reused
afterwards. `session-create` starts it explicitly, `session-close` closes it;
the next single-session call starts a fresh one.

## Multi-session mode

`create-session` starts an independent browser and returns its id. The
`*-session` tools take that id as `sessionId`. If `sessionId` is omitted, the
only live session is used, or the default session when there are several or
none. `list-sessions` and `get-all-urls` show every live session, the default
one included.

## Errors

Every tool returns text content. Failures reach the client as an isError
result whose text names what went wrong, e.g. "Failed to navigate: ..." or
"Session not found: ...".
"""
#endregion

#region Imports
import contextlib
from typing import Dict, Optional

from mcp.server.fastmcp import FastMCP
#endregion

#region Import from your package
from mcp_browser_sessions.constants import LOG_LEVEL, SERVER_NAME
from mcp_browser_sessions.context import get_context
from mcp_browser_sessions.decorators import tool_envelope
from mcp_browser_sessions.dispatch import ToolEngine
from mcp_browser_sessions.tools import get_tool
#endregion

#region Logger
import logging
logger = logging.getLogger(__name__)
#endregion

#region Helper Functions
def _describe(name: str) -> str:
    return get_tool(name).schema.description


@contextlib.asynccontextmanager
async def lifespan(server: FastMCP):
    """Close every browser session when the server shuts down."""
    try:
        yield
    finally:
        await get_context().close()
#endregion

#region FastMCP Initialization
mcp = FastMCP(SERVER_NAME, log_level=LOG_LEVEL, lifespan=lifespan)
engine = ToolEngine()
#endregion

#region Core Tools
@mcp.tool(name="navigate", description=_describe("navigate"))
@tool_envelope
async def navigate(url: str):
    return await engine.dispatch("navigate", {"url": url})


@mcp.tool(name="act", description=_describe("act"))
@tool_envelope
async def act(action: str, variables: Optional[Dict[str, str]] = None):
    return await engine.dispatch("act", {"action": action, "variables": variables})


@mcp.tool(name="extract", description=_describe("extract"))
@tool_envelope
async def extract(instruction: str, selector: Optional[str] = None):
    return await engine.dispatch("extract", {"instruction": instruction, "selector": selector})


@mcp.tool(name="observe", description=_describe("observe"))
@tool_envelope
async def observe(instruction: str):
    return await engine.dispatch("observe", {"instruction": instruction})


@mcp.tool(name="screenshot", description=_describe("screenshot"))
@tool_envelope
async def screenshot(name: Optional[str] = None):
    return await engine.dispatch("screenshot", {"name": name})


@mcp.tool(name="get-url", description=_describe("get-url"))
@tool_envelope
async def get_url():
    return await engine.dispatch("get-url", {})


@mcp.tool(name="session-create", description=_describe("session-create"))
@tool_envelope
async def session_create():
    return await engine.dispatch("session-create", {})


@mcp.tool(name="session-close", description=_describe("session-close"))
@tool_envelope
async def session_close():
    return await engine.dispatch("session-close", {})
#endregion

#region Multi-Session Tools
@mcp.tool(name="get-all-urls", description=_describe("get-all-urls"))
@tool_envelope
async def get_all_urls():
    return await engine.dispatch("get-all-urls", {})


@mcp.tool(name="create-session", description=_describe("create-session"))
@tool_envelope
async def create_session(config: Optional[dict] = None):
    return await engine.dispatch("create-session", {"config": config})


@mcp.tool(name="list-sessions", description=_describe("list-sessions"))
@tool_envelope
async def list_sessions():
    return await engine.dispatch("list-sessions", {})


@mcp.tool(name="close-session", description=_describe("close-session"))
@tool_envelope
async def close_session(sessionId: str):
    return await engine.dispatch("close-session", {"sessionId": sessionId})


@mcp.tool(name="navigate-session", description=_describe("navigate-session"))
@tool_envelope
async def navigate_session(url: str, sessionId: Optional[str] = None):
    return await engine.dispatch("navigate-session", {"sessionId": sessionId, "url": url})


@mcp.tool(name="act-session", description=_describe("act-session"))
@tool_envelope
async def act_session(
    action: str,
    sessionId: Optional[str] = None,
    variables: Optional[Dict[str, str]] = None,
):
    return await engine.dispatch(
        "act-session", {"sessionId": sessionId, "action": action, "variables": variables}
    )


@mcp.tool(name="extract-session", description=_describe("extract-session"))
@tool_envelope
async def extract_session(
    instruction: str,
    sessionId: Optional[str] = None,
    selector: Optional[str] = None,
):
    return await engine.dispatch(
        "extract-session", {"sessionId": sessionId, "instruction": instruction, "selector": selector}
    )


@mcp.tool(name="observe-session", description=_describe("observe-session"))
@tool_envelope
async def observe_session(instruction: str, sessionId: Optional[str] = None):
    return await engine.dispatch("observe-session", {"sessionId": sessionId, "instruction": instruction})


@mcp.tool(name="get-url-session", description=_describe("get-url-session"))
@tool_envelope
async def get_url_session(sessionId: Optional[str] = None):
    return await engine.dispatch("get-url-session", {"sessionId": sessionId})
#endregion


def main():
    mcp.run()


if __name__ == "__main__":
    main()
