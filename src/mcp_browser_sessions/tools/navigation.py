"""Navigation tools."""

from ..browser.base import PageHandle
from ..errors import ActionFailure
from .base import RunImmediately, Tool, ToolResult, ToolSchema, error_message, text_result
from .schemas import NavigateInput, SessionNavigateInput


def _navigate(page: PageHandle, url: str) -> ToolResult:
    async def action():
        try:
            await page.goto(url)
        except Exception as e:
            raise ActionFailure(f"Failed to navigate: {error_message(e)}") from e
        return text_result(f"Navigated to: {url}")

    return RunImmediately(action)


async def handle_navigate(context, params: NavigateInput) -> ToolResult:
    page = await context.get_active_page()
    return _navigate(page, params.url)


async def handle_navigate_session(context, params: SessionNavigateInput) -> ToolResult:
    record = await context.resolve_session(params.session_id)
    return _navigate(context.page_for(record), params.url)


navigate_tool = Tool(
    capability="core",
    schema=ToolSchema(
        name="navigate",
        description=(
            "Navigate to a URL in the browser. Only use this tool with URLs you're confident will work "
            "and stay up to date. Otherwise, use https://google.com as the starting point."
        ),
        input_schema=NavigateInput,
    ),
    handle=handle_navigate,
)

navigate_session_tool = Tool(
    capability="multi_session",
    schema=ToolSchema(
        name="navigate-session",
        description="Navigate a specific browser session to a URL.",
        input_schema=SessionNavigateInput,
    ),
    handle=handle_navigate_session,
)


__all__ = ["navigate_tool", "navigate_session_tool"]
