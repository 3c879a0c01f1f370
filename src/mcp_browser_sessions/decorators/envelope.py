# mcp_browser_sessions/decorators/envelope.py

import asyncio
import inspect
import functools
from typing import Any, Callable, List

from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import TextContent

from ..config import tool_errors_traceback

import logging
logger = logging.getLogger(__name__)


__all__ = [
    "tool_envelope",
]


def tool_envelope(func: Callable):
    """
    Decorator for MCP tool functions that return a ToolOutcome:
      - Only wraps async callables; every tool runs on the event loop.
      - On success: returns the outcome's ordered TextContent items.
      - On error: logs the failure and raises ToolError, which the MCP server
        reports to the client as an isError result carrying the message.
      - asyncio.CancelledError is re-raised untouched.
    Environment:
      - Set MBU_TOOL_ERRORS_TRACEBACK=0 to log failures without a traceback.
    """
    if not inspect.iscoroutinefunction(func):
        raise TypeError(f"tool_envelope expects an async function, got {func.__name__}")

    include_tb = tool_errors_traceback()

    def _unwrap(name: str, outcome: Any) -> List[TextContent]:
        if not outcome.is_error:
            return list(outcome.content)
        message = "\n".join(item.text for item in outcome.content) or "Tool failed"
        error = getattr(outcome, "error", None)
        exc_info = (type(error), error, error.__traceback__) if (include_tb and error is not None) else None
        logger.warning(f"{name} failed: {message}", exc_info=exc_info)
        raise ToolError(message)

    def _raise(name: str, err: Exception):
        logger.warning(f"{name} raised {err.__class__.__name__}: {err}", exc_info=include_tb)
        raise ToolError(f"{err.__class__.__name__}: {err}") from err

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            outcome = await func(*args, **kwargs)
        except asyncio.CancelledError:
            # Preserve cooperative cancellation semantics
            raise
        except ToolError:
            raise
        except Exception as e:
            _raise(func.__name__, e)
        return _unwrap(func.__name__, outcome)
    return wrapper
