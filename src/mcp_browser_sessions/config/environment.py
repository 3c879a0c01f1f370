"""Environment configuration and validation."""

import os
import shlex
import tempfile
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..constants import (
    DEFAULT_WINDOW_WIDTH,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_PAGE_LOAD_TIMEOUT,
)

import logging
logger = logging.getLogger(__name__)

load_dotenv()

_TRUTHY = ("1", "true", "yes", "on")

SESSION_CONFIG_KEYS = (
    "headless",
    "width",
    "height",
    "chrome_path",
    "user_agent",
    "extra_args",
    "page_load_timeout",
)


def _env_flag(name: str, default: str = "0") -> bool:
    return (os.getenv(name, default) or "").strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    if not raw.isdigit():
        raise EnvironmentError(f"{name} must be a positive integer, got {raw!r}.")
    return int(raw)


def get_env_config() -> dict:
    """
    Read environment variables describing how browsers are launched.

    Optional:   MCP_BROWSER_HEADLESS (default '0')
                CHROME_EXECUTABLE_PATH
                MCP_BROWSER_WIDTH / MCP_BROWSER_HEIGHT
                MCP_BROWSER_PAGE_LOAD_TIMEOUT (seconds)
                CHROME_EXTRA_ARGS (space separated Chrome flags)
                CHROME_USER_AGENT

    Every session gets its own throw-away profile, so no user data dir is read.
    """
    chrome_path = (os.getenv("CHROME_EXECUTABLE_PATH") or "").strip() or None
    if chrome_path and not Path(chrome_path).exists():
        logger.warning(f"CHROME_EXECUTABLE_PATH does not exist: {chrome_path}")

    return {
        "headless": _env_flag("MCP_BROWSER_HEADLESS"),
        "width": _env_int("MCP_BROWSER_WIDTH", DEFAULT_WINDOW_WIDTH),
        "height": _env_int("MCP_BROWSER_HEIGHT", DEFAULT_WINDOW_HEIGHT),
        "chrome_path": chrome_path,
        "user_agent": (os.getenv("CHROME_USER_AGENT") or "").strip() or None,
        "extra_args": shlex.split(os.getenv("CHROME_EXTRA_ARGS") or ""),
        "page_load_timeout": _env_int("MCP_BROWSER_PAGE_LOAD_TIMEOUT", DEFAULT_PAGE_LOAD_TIMEOUT),
    }


def merge_session_config(base: dict, overrides: Optional[dict] = None) -> dict:
    """
    Overlay per-session overrides on top of the environment defaults.

    Keys set to None are ignored; unknown keys are rejected so that a typo
    does not silently launch a browser with the defaults.
    """
    merged = dict(base)
    for key, value in (overrides or {}).items():
        if key not in SESSION_CONFIG_KEYS:
            raise ValueError(f"Unknown session config option: {key}")
        if value is None:
            continue
        merged[key] = value
    return merged


def get_screenshot_dir() -> str:
    """
    Directory screenshots are written to.

    Uses MCP_SCREENSHOT_DIR if set, otherwise <tmp>/mcp_browser_sessions/screenshots.
    The directory is created if it doesn't exist.
    """
    default = os.path.join(tempfile.gettempdir(), "mcp_browser_sessions", "screenshots")
    path = os.getenv("MCP_SCREENSHOT_DIR") or default
    Path(path).mkdir(parents=True, exist_ok=True)
    return path


def tool_errors_traceback() -> bool:
    return os.getenv("MBU_TOOL_ERRORS_TRACEBACK", "1") not in ("0", "false", "False")
