"""Page interaction tools."""

from typing import Mapping, Optional

from ..browser.base import PageHandle
from ..errors import ActionFailure
from .base import RunImmediately, Tool, ToolResult, ToolSchema, error_message, text_result
from .schemas import ActInput, SessionActInput


def _act(page: PageHandle, action_text: str, variables: Optional[Mapping[str, str]]) -> ToolResult:
    async def action():
        try:
            performed = await page.act(action_text, variables)
        except Exception as e:
            raise ActionFailure(f"Failed to perform action: {error_message(e)}") from e
        return text_result(f"Action performed: {performed}")

    return RunImmediately(action)


async def handle_act(context, params: ActInput) -> ToolResult:
    page = await context.get_active_page()
    return _act(page, params.action, params.variables)


async def handle_act_session(context, params: SessionActInput) -> ToolResult:
    record = await context.resolve_session(params.session_id)
    return _act(context.page_for(record), params.action, params.variables)


_ACT_DESCRIPTION = (
    "Perform a single action on the page. Supported forms: 'click <selector>', "
    "'type <text> into <selector>', 'fill <selector> with <text>', 'press <KEY>' and "
    "'scroll <up|down|top|bottom> [pixels]'. Selectors are CSS unless prefixed with "
    "xpath=, id=, name=, text= or partial_text=. Put sensitive values in variables and "
    "reference them as %name%."
)

act_tool = Tool(
    capability="core",
    schema=ToolSchema(name="act", description=_ACT_DESCRIPTION, input_schema=ActInput),
    handle=handle_act,
)

act_session_tool = Tool(
    capability="multi_session",
    schema=ToolSchema(
        name="act-session",
        description=_ACT_DESCRIPTION + " Runs in the given session.",
        input_schema=SessionActInput,
    ),
    handle=handle_act_session,
)


__all__ = ["act_tool", "act_session_tool"]
