"""URL query tools."""

import json
from typing import Dict

from ..constants import NO_SESSIONS_MESSAGE
from ..errors import ActionFailure
from ..registry import SessionRecord, SessionRegistry
from .base import RunImmediately, Tool, ToolResult, ToolSchema, error_message, text_result
from .schemas import EmptyInput, SessionScopedInput


def error_marker(error: BaseException) -> str:
    return f"<error: {error_message(error)}>"


async def read_session_url(record: SessionRecord) -> str:
    """Current URL of a session, or an inline error marker if it cannot be read."""
    try:
        page = record.page
        if page is None:
            raise RuntimeError("no active page")
        return await page.url()
    except Exception as e:
        return error_marker(e)


async def collect_session_urls(registry: SessionRegistry) -> Dict[str, str]:
    """
    Current URL of every registered session, keyed by session id.

    A failing session never hides the others. Sessions closed while the
    listing runs are left out instead of being reported as errors.
    """
    urls = {}
    for record in registry.list():
        url = await read_session_url(record)
        if record.closed or record.id not in registry:
            continue
        urls[record.id] = url
    return urls


def _get_url(page) -> ToolResult:
    async def action():
        try:
            current_url = await page.url()
        except Exception as e:
            raise ActionFailure(f"Failed to get current URL: {error_message(e)}") from e
        return text_result(current_url)

    return RunImmediately(action)


async def handle_get_url(context, params: EmptyInput) -> ToolResult:
    page = await context.get_active_page()
    return _get_url(page)


async def handle_get_url_session(context, params: SessionScopedInput) -> ToolResult:
    record = await context.resolve_session(params.session_id)
    return _get_url(context.page_for(record))


async def handle_get_all_urls(context, params: EmptyInput) -> ToolResult:
    async def action():
        try:
            if not context.registry.list():
                return text_result(NO_SESSIONS_MESSAGE)
            urls = await collect_session_urls(context.registry)
        except Exception as e:
            raise ActionFailure(f"Failed to get session URLs: {error_message(e)}") from e
        return text_result(json.dumps(urls, indent=2))

    return RunImmediately(action)


get_url_tool = Tool(
    capability="core",
    schema=ToolSchema(
        name="get-url",
        description=(
            "Gets the current URL of the browser page. Returns the complete URL including protocol, "
            "domain, path, and any query parameters or fragments."
        ),
        input_schema=EmptyInput,
    ),
    handle=handle_get_url,
)

get_url_session_tool = Tool(
    capability="multi_session",
    schema=ToolSchema(
        name="get-url-session",
        description="Gets the current URL of a specific browser session.",
        input_schema=SessionScopedInput,
    ),
    handle=handle_get_url_session,
)

get_all_urls_tool = Tool(
    capability="multi_session",
    schema=ToolSchema(
        name="get-all-urls",
        description=(
            "Gets the current URLs of all active browser sessions. Returns a mapping of session IDs "
            "to their current URLs."
        ),
        input_schema=EmptyInput,
    ),
    handle=handle_get_all_urls,
)


__all__ = [
    "error_marker",
    "read_session_url",
    "collect_session_urls",
    "get_url_tool",
    "get_url_session_tool",
    "get_all_urls_tool",
]
