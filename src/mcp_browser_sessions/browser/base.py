"""Interfaces the session layer expects from a browser driver."""

from typing import Awaitable, Callable, List, Mapping, Optional, Protocol


class PageHandle(Protocol):
    """The current page of a driver. All operations suspend the caller."""

    async def goto(self, url: str) -> None: ...

    async def url(self) -> str: ...

    async def title(self) -> str: ...

    async def act(self, action: str, variables: Optional[Mapping[str, str]] = None) -> str: ...

    async def extract(self, instruction: str, selector: Optional[str] = None) -> str: ...

    async def observe(self, instruction: str) -> List[dict]: ...

    async def screenshot(self) -> bytes: ...

    async def wait_for_network_idle(self, timeout: float) -> bool: ...


class DriverHandle(Protocol):
    """A running browser owned by exactly one session."""

    @property
    def session_id(self) -> Optional[str]: ...

    @property
    def page(self) -> Optional[PageHandle]: ...

    async def close(self) -> None: ...


DriverFactory = Callable[[Optional[dict]], Awaitable[DriverHandle]]
"""Creates a driver from per-session config overrides."""


__all__ = ["PageHandle", "DriverHandle", "DriverFactory"]
