"""
Tools that address browser sessions explicitly by id.

create-session starts an independent browser and returns its id; later calls
pass that id as `sessionId`. list-sessions and get-all-urls read every
session's URL separately so one broken session never hides the others.
"""

import json

from ..errors import ActionFailure
from .base import RunImmediately, Tool, ToolResult, ToolSchema, error_message, text_result
from .schemas import CloseSessionInput, CreateSessionInput, EmptyInput
from .url import collect_session_urls

import logging
logger = logging.getLogger(__name__)


async def handle_create_session(context, params: CreateSessionInput) -> ToolResult:
    config = params.config.model_dump(exclude_none=True) if params.config is not None else None

    async def action():
        record = await context.registry.create(config)
        return text_result(json.dumps({"sessionId": record.id}))

    return RunImmediately(action)


async def handle_list_sessions(context, params: EmptyInput) -> ToolResult:
    async def action():
        try:
            urls = await collect_session_urls(context.registry)
        except Exception as e:
            raise ActionFailure(f"Failed to list sessions: {error_message(e)}") from e
        sessions = [{"sessionId": session_id, "url": url} for session_id, url in urls.items()]
        return text_result(json.dumps(sessions, indent=2))

    return RunImmediately(action)


async def handle_close_session(context, params: CloseSessionInput) -> ToolResult:
    async def action():
        if await context.registry.close(params.session_id):
            return text_result(f"Closed session {params.session_id}")
        logger.debug(f"close-session: unknown id {params.session_id}")
        return text_result(f"Session not found: {params.session_id}")

    return RunImmediately(action)


create_session_tool = Tool(
    capability="multi_session",
    schema=ToolSchema(
        name="create-session",
        description=(
            "Create a new, independent browser session and return its id. "
            "Optional config overrides headless mode, window size, Chrome binary, user agent and extra flags."
        ),
        input_schema=CreateSessionInput,
    ),
    handle=handle_create_session,
)

list_sessions_tool = Tool(
    capability="multi_session",
    schema=ToolSchema(
        name="list-sessions",
        description="List all active browser sessions with their current URLs, oldest first.",
        input_schema=EmptyInput,
    ),
    handle=handle_list_sessions,
)

close_session_tool = Tool(
    capability="multi_session",
    schema=ToolSchema(
        name="close-session",
        description="Close a browser session by id and release its browser.",
        input_schema=CloseSessionInput,
    ),
    handle=handle_close_session,
)


__all__ = ["create_session_tool", "list_sessions_tool", "close_session_tool"]
