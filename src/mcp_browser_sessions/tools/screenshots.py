"""Screenshot capture tool."""

import re
import asyncio
import datetime
from pathlib import Path
from typing import Optional

from ..config import get_screenshot_dir
from ..errors import ActionFailure
from .base import RunImmediately, Tool, ToolResult, ToolSchema, error_message, text_result
from .schemas import ScreenshotInput


def screenshot_filename(name: Optional[str] = None) -> str:
    stem = re.sub(r"[^A-Za-z0-9_-]+", "_", (name or "").strip()).strip("_") or "screenshot"
    stamp = datetime.datetime.now(datetime.timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    return f"{stem}-{stamp}.png"


async def handle_screenshot(context, params: ScreenshotInput) -> ToolResult:
    page = await context.get_active_page()

    async def action():
        try:
            png_bytes = await page.screenshot()
            path = Path(get_screenshot_dir()) / screenshot_filename(params.name)
            await asyncio.to_thread(path.write_bytes, png_bytes)
        except Exception as e:
            raise ActionFailure(f"Failed to take screenshot: {error_message(e)}") from e
        return text_result(f"Screenshot saved to: {path} ({len(png_bytes)} bytes)")

    return RunImmediately(action)


screenshot_tool = Tool(
    capability="core",
    schema=ToolSchema(
        name="screenshot",
        description="Take a PNG screenshot of the current page and save it to the screenshot directory.",
        input_schema=ScreenshotInput,
    ),
    handle=handle_screenshot,
)


__all__ = ["screenshot_tool", "screenshot_filename"]
