"""Extraction and observation tools.

Both wait for the page to settle before reading it, since content rendered
after the initial load would otherwise be missed.
"""

import json
from typing import Optional

from ..browser.base import PageHandle
from ..errors import ActionFailure
from .base import AfterNetworkIdle, Tool, ToolResult, ToolSchema, error_message, text_result
from .schemas import ExtractInput, ObserveInput, SessionExtractInput, SessionObserveInput


def _extract(page: PageHandle, instruction: str, selector: Optional[str]) -> ToolResult:
    async def action():
        try:
            content = await page.extract(instruction, selector=selector)
        except Exception as e:
            raise ActionFailure(f"Failed to extract content: {error_message(e)}") from e
        return text_result(f"Extracted content for: {instruction}\n\n{content}")

    return AfterNetworkIdle(action=action, page=page)


def _observe(page: PageHandle, instruction: str) -> ToolResult:
    async def action():
        try:
            observations = await page.observe(instruction)
        except Exception as e:
            raise ActionFailure(f"Failed to observe: {error_message(e)}") from e
        if not observations:
            return text_result(f"No interactive elements found for: {instruction}")
        return text_result(f"Observations: {json.dumps(observations, indent=2, ensure_ascii=False)}")

    return AfterNetworkIdle(action=action, page=page)


async def handle_extract(context, params: ExtractInput) -> ToolResult:
    page = await context.get_active_page()
    return _extract(page, params.instruction, params.selector)


async def handle_extract_session(context, params: SessionExtractInput) -> ToolResult:
    record = await context.resolve_session(params.session_id)
    return _extract(context.page_for(record), params.instruction, params.selector)


async def handle_observe(context, params: ObserveInput) -> ToolResult:
    page = await context.get_active_page()
    return _observe(page, params.instruction)


async def handle_observe_session(context, params: SessionObserveInput) -> ToolResult:
    record = await context.resolve_session(params.session_id)
    return _observe(context.page_for(record), params.instruction)


extract_tool = Tool(
    capability="core",
    schema=ToolSchema(
        name="extract",
        description=(
            "Extract the readable text of the current page, optionally limited to elements "
            "matching a CSS selector. Scripts, styles, ads and hidden elements are removed."
        ),
        input_schema=ExtractInput,
    ),
    handle=handle_extract,
)

extract_session_tool = Tool(
    capability="multi_session",
    schema=ToolSchema(
        name="extract-session",
        description="Extract the readable text of a specific session's page.",
        input_schema=SessionExtractInput,
    ),
    handle=handle_extract_session,
)

observe_tool = Tool(
    capability="core",
    schema=ToolSchema(
        name="observe",
        description=(
            "List interactive elements (links, buttons, inputs) on the current page with a CSS "
            "selector and suggested action each, most relevant to the instruction first."
        ),
        input_schema=ObserveInput,
    ),
    handle=handle_observe,
)

observe_session_tool = Tool(
    capability="multi_session",
    schema=ToolSchema(
        name="observe-session",
        description="List interactive elements on a specific session's page.",
        input_schema=SessionObserveInput,
    ),
    handle=handle_observe_session,
)


__all__ = ["extract_tool", "extract_session_tool", "observe_tool", "observe_session_tool"]
