"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.
"""

import os

# ============================================================================
# Browser Defaults
# ============================================================================

DEFAULT_WINDOW_WIDTH = 1024
"""Default browser window width in pixels."""

DEFAULT_WINDOW_HEIGHT = 768
"""Default browser window height in pixels."""

DEFAULT_PAGE_LOAD_TIMEOUT = 30
"""Default page load timeout in seconds."""


# ============================================================================
# Waiting / Settling
# ============================================================================

NETWORK_IDLE_TIMEOUT_SECS = float(os.getenv("MCP_NETWORK_IDLE_TIMEOUT", "10"))
"""How long the engine waits for the page to settle when a tool asks for it."""

SNAPSHOT_SETTLE_MS = int(os.getenv("SNAPSHOT_SETTLE_MS", "200") or "0")
"""Extra delay after document readiness before reading the page (0 disables)."""

DOCUMENT_READY_TIMEOUT_SECS = 10.0
"""How long navigation waits for document.readyState."""


# ============================================================================
# Rendering Configuration
# ============================================================================

MAX_EXTRACT_CHARS = int(os.getenv("MCP_MAX_EXTRACT_CHARS", "20000"))
"""Maximum characters returned by extract."""

MAX_OBSERVATIONS = 25
"""Maximum number of elements returned by observe."""


# ============================================================================
# Server
# ============================================================================

SERVER_NAME = "mcp_browser_sessions"

LOG_LEVEL = (os.getenv("MCP_BROWSER_LOG_LEVEL") or "INFO").upper()
"""Log level handed to FastMCP."""

NO_SESSIONS_MESSAGE = "No active sessions found"


__all__ = [
    "DEFAULT_WINDOW_WIDTH",
    "DEFAULT_WINDOW_HEIGHT",
    "DEFAULT_PAGE_LOAD_TIMEOUT",
    "NETWORK_IDLE_TIMEOUT_SECS",
    "SNAPSHOT_SETTLE_MS",
    "DOCUMENT_READY_TIMEOUT_SECS",
    "MAX_EXTRACT_CHARS",
    "MAX_OBSERVATIONS",
    "SERVER_NAME",
    "LOG_LEVEL",
    "NO_SESSIONS_MESSAGE",
]
