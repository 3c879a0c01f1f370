"""
Tool catalog.

CORE_TOOLS work on the default session; MULTI_SESSION_TOOLS address
sessions by id. TOOLS is the full catalog in registration order.
"""

from typing import Dict, List, Optional

from .base import Tool
from .browser_management import session_close_tool, session_create_tool
from .extraction import extract_session_tool, extract_tool, observe_session_tool, observe_tool
from .interaction import act_session_tool, act_tool
from .multi_session import close_session_tool, create_session_tool, list_sessions_tool
from .navigation import navigate_session_tool, navigate_tool
from .screenshots import screenshot_tool
from .url import get_all_urls_tool, get_url_session_tool, get_url_tool

CORE_TOOLS: List[Tool] = [
    navigate_tool,
    act_tool,
    extract_tool,
    observe_tool,
    screenshot_tool,
    get_url_tool,
    session_create_tool,
    session_close_tool,
]

MULTI_SESSION_TOOLS: List[Tool] = [
    get_all_urls_tool,
    create_session_tool,
    list_sessions_tool,
    close_session_tool,
    navigate_session_tool,
    act_session_tool,
    extract_session_tool,
    observe_session_tool,
    get_url_session_tool,
]

TOOLS: List[Tool] = CORE_TOOLS + MULTI_SESSION_TOOLS

_BY_NAME: Dict[str, Tool] = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> Optional[Tool]:
    return _BY_NAME.get(name)


__all__ = ["CORE_TOOLS", "MULTI_SESSION_TOOLS", "TOOLS", "get_tool", "Tool"]
