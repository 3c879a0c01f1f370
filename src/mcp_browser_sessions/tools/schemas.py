"""Input schemas for every tool."""

from typing import Dict, List, Optional

from pydantic import Field

from .base import ToolInput


class EmptyInput(ToolInput):
    pass


class SessionScopedInput(ToolInput):
    session_id: Optional[str] = Field(
        default=None,
        alias="sessionId",
        description="Target session id. Omit to use the only live session or the default session.",
    )


class NavigateInput(ToolInput):
    url: str = Field(description="The URL to navigate to")


class SessionNavigateInput(SessionScopedInput, NavigateInput):
    pass


class ActInput(ToolInput):
    action: str = Field(
        description=(
            "The action to perform, e.g. \"click #submit\", \"type 'hello' into input[name=q]\", "
            "\"press ENTER\" or \"scroll down 500\"."
        )
    )
    variables: Optional[Dict[str, str]] = Field(
        default=None,
        description="Values substituted for %name% placeholders in the action; keep secrets here.",
    )


class SessionActInput(SessionScopedInput, ActInput):
    pass


class ExtractInput(ToolInput):
    instruction: str = Field(description="What to extract from the page")
    selector: Optional[str] = Field(
        default=None,
        description="Optional CSS selector limiting extraction to matching elements",
    )


class SessionExtractInput(SessionScopedInput, ExtractInput):
    pass


class ObserveInput(ToolInput):
    instruction: str = Field(description="What kind of elements to look for, e.g. 'search box'")


class SessionObserveInput(SessionScopedInput, ObserveInput):
    pass


class ScreenshotInput(ToolInput):
    name: Optional[str] = Field(default=None, description="Optional file name stem for the screenshot")


class SessionConfig(ToolInput):
    headless: Optional[bool] = None
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    chrome_path: Optional[str] = None
    user_agent: Optional[str] = None
    extra_args: Optional[List[str]] = None
    page_load_timeout: Optional[int] = Field(default=None, gt=0)


class CreateSessionInput(ToolInput):
    config: Optional[SessionConfig] = Field(
        default=None,
        description="Optional overrides of the browser launch defaults",
    )


class CloseSessionInput(ToolInput):
    session_id: str = Field(alias="sessionId", description="Id of the session to close")


__all__ = [
    "EmptyInput",
    "SessionScopedInput",
    "NavigateInput",
    "SessionNavigateInput",
    "ActInput",
    "SessionActInput",
    "ExtractInput",
    "SessionExtractInput",
    "ObserveInput",
    "SessionObserveInput",
    "ScreenshotInput",
    "SessionConfig",
    "CreateSessionInput",
    "CloseSessionInput",
]
