"""
Browser sessions for MCP clients.

One process hosts any number of independent browser sessions, each owning its
own Selenium-driven Chrome. Single-session tools share a lazily created
default session; multi-session tools address sessions by id.
"""

from .context import BrowserContext, get_context, reset_context
from .dispatch import ToolEngine, ToolOutcome
from .errors import (
    ActionFailure,
    BrowserToolError,
    DriverInitError,
    InvalidInput,
    SessionNotFound,
    Unavailable,
)
from .registry import SessionId, SessionRecord, SessionRegistry

__all__ = [
    "BrowserContext",
    "get_context",
    "reset_context",
    "ToolEngine",
    "ToolOutcome",
    "BrowserToolError",
    "InvalidInput",
    "DriverInitError",
    "SessionNotFound",
    "Unavailable",
    "ActionFailure",
    "SessionId",
    "SessionRecord",
    "SessionRegistry",
]
