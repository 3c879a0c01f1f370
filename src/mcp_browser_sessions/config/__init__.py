"""Configuration management for browser automation."""

from .environment import (
    SESSION_CONFIG_KEYS,
    get_env_config,
    get_screenshot_dir,
    merge_session_config,
    tool_errors_traceback,
)

__all__ = [
    "SESSION_CONFIG_KEYS",
    "get_env_config",
    "get_screenshot_dir",
    "merge_session_config",
    "tool_errors_traceback",
]
