"""Default-session management tools (single-session mode)."""

from .base import RunImmediately, Tool, ToolResult, ToolSchema, text_result
from .schemas import EmptyInput


async def handle_session_create(context, params: EmptyInput) -> ToolResult:
    async def action():
        existing = context.default_session_id()
        record = await context.get_default_session()
        if existing == record.id:
            return text_result(f"Browser session already active: {record.id}")
        return text_result(f"Browser session created: {record.id}")

    return RunImmediately(action)


async def handle_session_close(context, params: EmptyInput) -> ToolResult:
    async def action():
        closed_id = await context.close_default_session()
        if closed_id is None:
            return text_result("No active session to close")
        return text_result(f"Closed session {closed_id}")

    return RunImmediately(action)


session_create_tool = Tool(
    capability="core",
    schema=ToolSchema(
        name="session-create",
        description="Start the default browser session if it is not running yet and return its id.",
        input_schema=EmptyInput,
    ),
    handle=handle_session_create,
)

session_close_tool = Tool(
    capability="core",
    schema=ToolSchema(
        name="session-close",
        description="Close the default browser session. The next single-session tool call starts a new one.",
        input_schema=EmptyInput,
    ),
    handle=handle_session_close,
)


__all__ = ["session_create_tool", "session_close_tool"]
