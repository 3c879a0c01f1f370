"""Error taxonomy shared by the registry, the context and the tool engine."""


class BrowserToolError(Exception):
    """Base class for every error surfaced to a tool caller."""

    kind = "browser_tool_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidInput(BrowserToolError):
    """Raw tool arguments did not match the tool's input schema."""

    kind = "invalid_input"

    def __init__(self, message: str, diagnostics=None):
        super().__init__(message)
        self.diagnostics = diagnostics or []


class DriverInitError(BrowserToolError):
    """The browser driver could not be started."""

    kind = "driver_init_error"


class SessionNotFound(BrowserToolError):
    kind = "session_not_found"

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class Unavailable(BrowserToolError):
    """A session was resolved but has no open page."""

    kind = "unavailable"


class ActionFailure(BrowserToolError):
    kind = "action_failure"


__all__ = [
    "BrowserToolError",
    "InvalidInput",
    "DriverInitError",
    "SessionNotFound",
    "Unavailable",
    "ActionFailure",
]
