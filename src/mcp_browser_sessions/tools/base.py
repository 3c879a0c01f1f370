"""
Tool definition and result types.

A tool handler receives the context and its validated input, resolves the
session it targets and returns a ToolResult: a deferred action plus how the
engine should schedule it. Handlers never run the action themselves.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, List, Type

from mcp.types import TextContent
from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from ..browser.base import PageHandle
    from ..context import BrowserContext


@dataclass
class ToolActionResult:
    """Normalized success payload: an ordered list of text content items."""

    content: List[TextContent] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(item.text for item in self.content)


def text_result(*texts: str) -> ToolActionResult:
    return ToolActionResult(content=[TextContent(type="text", text=t) for t in texts])


Action = Callable[[], Awaitable[ToolActionResult]]


@dataclass(frozen=True)
class ToolResult:
    """A deferred action. Subclasses decide whether the engine waits for the network."""

    action: Action

    @property
    def wait_for_network(self) -> bool:
        return False


@dataclass(frozen=True)
class RunImmediately(ToolResult):
    """Run the action as soon as the handler returns."""


@dataclass(frozen=True)
class AfterNetworkIdle(ToolResult):
    """Let `page` settle before running the action."""

    page: "PageHandle" = None

    @property
    def wait_for_network(self) -> bool:
        return True


class ToolInput(BaseModel):
    """Base for tool input schemas. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


@dataclass(frozen=True)
class ToolSchema:
    name: str
    description: str
    input_schema: Type[ToolInput]


Handler = Callable[["BrowserContext", ToolInput], Awaitable[ToolResult]]


@dataclass(frozen=True)
class Tool:
    """
    A named, schema-validated operation.

    capability is "core" for single-session tools and "multi_session" for
    tools that address sessions by id.
    """

    capability: str
    schema: ToolSchema
    handle: Handler

    @property
    def name(self) -> str:
        return self.schema.name


def error_message(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


__all__ = [
    "ToolActionResult",
    "text_result",
    "Action",
    "ToolResult",
    "RunImmediately",
    "AfterNetworkIdle",
    "ToolInput",
    "ToolSchema",
    "Tool",
    "error_message",
]
