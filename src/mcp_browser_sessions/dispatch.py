"""
Tool dispatch.

Every tool call runs through the same state machine:

    Received -> Validated -> Resolved -> Executing -> Succeeded
        |           |           |            |
        +-----------+-----------+------------+--> Failed

    - Received: the tool name is looked up; unknown names fail as InvalidInput.
    - Validated: raw arguments are checked against the tool's pydantic schema.
    - Resolved: the handler picked its session/page and returned a ToolResult.
    - Executing: the optional network wait ran, then the deferred action.

Failures keep their error kind. Anything that is not a BrowserToolError and
happens while executing is reported as an ActionFailure.
"""

import enum
import asyncio
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from mcp.types import TextContent
from pydantic import ValidationError

from .constants import NETWORK_IDLE_TIMEOUT_SECS
from .context import BrowserContext, get_context
from .errors import ActionFailure, BrowserToolError, InvalidInput
from .tools import TOOLS, Tool
from .tools.base import ToolActionResult, ToolResult, error_message

import logging
logger = logging.getLogger(__name__)


class InvocationState(enum.Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    RESOLVED = "resolved"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class ToolOutcome:
    """What a client sees: ordered content items plus an error flag."""

    content: List[TextContent] = field(default_factory=list)
    is_error: bool = False
    error: Optional[BaseException] = None

    @property
    def text(self) -> str:
        return "\n".join(item.text for item in self.content)


def _format_diagnostics(errors: Sequence[Mapping[str, Any]]) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


class ToolEngine:
    """
    Validates, resolves and executes tool calls against a BrowserContext.

    Attributes:
        context: Context the handlers resolve sessions through
        network_idle_timeout: Seconds to wait when a tool asks for a settled page
    """

    def __init__(
        self,
        context: Optional[BrowserContext] = None,
        tools: Optional[Sequence[Tool]] = None,
        network_idle_timeout: float = NETWORK_IDLE_TIMEOUT_SECS,
    ):
        self._context = context
        self._tools = {tool.name: tool for tool in (tools if tools is not None else TOOLS)}
        self.network_idle_timeout = network_idle_timeout

    @property
    def context(self) -> BrowserContext:
        # Late binding so reset_context() takes effect for a long-lived engine
        return self._context if self._context is not None else get_context()

    @property
    def tool_names(self) -> List[str]:
        return list(self._tools)

    def _transition(self, name: str, state: InvocationState) -> None:
        logger.debug(f"tool {name}: {state.value}")

    async def _wait_for_network(self, name: str, result: ToolResult) -> None:
        page = getattr(result, "page", None)
        if page is None:
            return
        try:
            settled = await page.wait_for_network_idle(self.network_idle_timeout)
            if not settled:
                logger.debug(f"tool {name}: page did not settle within {self.network_idle_timeout}s")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"tool {name}: network wait failed, continuing: {e}")

    async def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolActionResult:
        """
        Run one tool call.

        Raises:
            InvalidInput: Unknown tool or arguments not matching the schema.
            SessionNotFound / Unavailable / DriverInitError: Target resolution failed.
            ActionFailure: The action itself failed.
        """
        self._transition(name, InvocationState.RECEIVED)
        try:
            tool = self._tools.get(name)
            if tool is None:
                raise InvalidInput(f"Unknown tool: {name}")

            try:
                params = tool.schema.input_schema.model_validate(dict(arguments or {}))
            except ValidationError as e:
                diagnostics = e.errors(include_url=False)
                raise InvalidInput(
                    f"Invalid arguments for {name}: {_format_diagnostics(diagnostics)}",
                    diagnostics=diagnostics,
                ) from e
            self._transition(name, InvocationState.VALIDATED)

            result = await tool.handle(self.context, params)
            self._transition(name, InvocationState.RESOLVED)

            if result.wait_for_network:
                await self._wait_for_network(name, result)

            self._transition(name, InvocationState.EXECUTING)
            try:
                output = await result.action()
            except (BrowserToolError, asyncio.CancelledError):
                raise
            except Exception as e:
                raise ActionFailure(error_message(e)) from e
        except BaseException:
            self._transition(name, InvocationState.FAILED)
            raise

        self._transition(name, InvocationState.SUCCEEDED)
        return output

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolOutcome:
        """Like `call`, but every failure becomes an error outcome instead of an exception."""
        try:
            output = await self.call(name, arguments)
        except asyncio.CancelledError:
            raise
        except BrowserToolError as e:
            return ToolOutcome(content=[TextContent(type="text", text=e.message)], is_error=True, error=e)
        except Exception as e:
            logger.exception(f"tool {name}: unexpected error")
            return ToolOutcome(
                content=[TextContent(type="text", text=f"{e.__class__.__name__}: {error_message(e)}")],
                is_error=True,
                error=e,
            )
        return ToolOutcome(content=list(output.content))


__all__ = ["InvocationState", "ToolOutcome", "ToolEngine"]
