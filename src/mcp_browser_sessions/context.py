"""
Centralized browser state management.

The BrowserContext resolves which session a tool call targets:

    - Single-session tools use the default session, created lazily on first
      use and cached afterwards.
    - Multi-session tools name a session id explicitly, or fall back to the
      only live session / the default session when they omit it.

Concurrency:
    The default session is created under a single-flight guard: concurrent
    first calls all await the same creation task, so at most one default
    driver is ever started at a time.

Usage:
    from mcp_browser_sessions.context import get_context

    ctx = get_context()
    page = await ctx.get_active_page()
"""

import asyncio
from dataclasses import dataclass
from typing import Optional, Union

from .browser.base import DriverHandle, PageHandle
from .errors import SessionNotFound, Unavailable
from .registry import SessionRecord, SessionRegistry

import logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Uninitialized:
    """No default session exists yet (or the last one was closed)."""


@dataclass(frozen=True)
class Initializing:
    """A default session is being created; waiters await this task."""

    task: "asyncio.Task[SessionRecord]"


@dataclass(frozen=True)
class Ready:
    record: SessionRecord


DefaultSession = Union[Uninitialized, Initializing, Ready]


class BrowserContext:
    """
    Per-process coordinator between tool handlers and the session registry.

    Attributes:
        registry: Registry holding every live session, default one included
        default_config: Config overrides used when creating the default session
    """

    def __init__(self, registry: Optional[SessionRegistry] = None, default_config: Optional[dict] = None):
        self.registry = registry if registry is not None else SessionRegistry()
        self.default_config = dict(default_config or {})
        self._default: DefaultSession = Uninitialized()

    @property
    def default_state(self) -> DefaultSession:
        return self._default

    def default_session_id(self) -> Optional[str]:
        """Id of the live default session, if there is one."""
        slot = self._default
        if isinstance(slot, Ready) and slot.record.id in self.registry:
            return slot.record.id
        return None

    async def _create_default(self) -> SessionRecord:
        try:
            record = await self.registry.create(self.default_config)
        except BaseException:
            # Leave the slot empty so a later call may retry
            self._default = Uninitialized()
            raise
        self._default = Ready(record)
        logger.debug(f"Default session is {record.id}")
        return record

    async def get_default_session(self) -> SessionRecord:
        """
        Return the default session, creating it on first use.

        Raises:
            DriverInitError: If the driver cannot be started.
        """
        slot = self._default
        if isinstance(slot, Ready):
            if slot.record.id in self.registry:
                return slot.record
            # Closed through the registry (e.g. close-session)
            self._default = slot = Uninitialized()

        # Shielded so one cancelled caller does not abort the shared creation
        if isinstance(slot, Initializing):
            return await asyncio.shield(slot.task)

        task = asyncio.ensure_future(self._create_default())
        self._default = Initializing(task)
        return await asyncio.shield(task)

    async def get_driver(self) -> DriverHandle:
        """Driver of the default session (single-session mode)."""
        record = await self.get_default_session()
        return record.driver

    async def get_active_page(self) -> PageHandle:
        """
        Current page of the default session.

        Raises:
            DriverInitError: If the default driver cannot be started.
            Unavailable: If the driver has no open page.
        """
        record = await self.get_default_session()
        return self.page_for(record)

    def page_for(self, record: SessionRecord) -> PageHandle:
        page = record.page
        if page is None:
            raise Unavailable(f"No active page available for session {record.id}")
        return page

    async def resolve_session(self, session_id: Optional[str] = None) -> SessionRecord:
        """
        Resolve the session a multi-session tool targets.

        An explicit id must exist; it never falls back to the default session.
        Without an id, the only live session is used if exactly one exists,
        otherwise the default session (created if needed).

        Raises:
            SessionNotFound: If `session_id` is given but not registered.
        """
        if session_id is not None:
            record = self.registry.get(session_id)
            if record is None:
                raise SessionNotFound(session_id)
            return record

        records = self.registry.list()
        if len(records) == 1:
            return records[0]
        return await self.get_default_session()

    async def _settle_default(self) -> DefaultSession:
        """Wait out a pending default creation and return the resulting slot."""
        slot = self._default
        if isinstance(slot, Initializing):
            await asyncio.wait([slot.task])
            slot = self._default
        return slot

    async def close_default_session(self) -> Optional[str]:
        """
        Close the default session.

        Returns:
            The closed session id, or None if there was no default session.
        """
        slot = await self._settle_default()
        self._default = Uninitialized()
        if isinstance(slot, Ready) and await self.registry.close(slot.record.id):
            return slot.record.id
        return None

    async def close(self) -> None:
        """Close every session (process shutdown)."""
        await self._settle_default()
        self._default = Uninitialized()
        closed = await self.registry.close_all()
        if closed:
            logger.info(f"Closed {closed} browser session(s) on shutdown")


# ============================================================================
# Global Context Management
# ============================================================================

_global_context: Optional[BrowserContext] = None


def get_context() -> BrowserContext:
    """
    Get or create the global browser context.

    This is a singleton pattern - all calls return the same context instance.
    Use reset_context() to clear the singleton (mainly for testing).
    """
    global _global_context

    if _global_context is None:
        _global_context = BrowserContext()

    return _global_context


def set_context(context: BrowserContext) -> None:
    """Install a prebuilt context (tests, embedding)."""
    global _global_context
    _global_context = context


def reset_context() -> None:
    """
    Reset the global context.

    This is primarily for testing. It does not close any browser; use
    `await get_context().close()` for that.
    """
    global _global_context
    _global_context = None


__all__ = [
    "BrowserContext",
    "DefaultSession",
    "Uninitialized",
    "Initializing",
    "Ready",
    "get_context",
    "set_context",
    "reset_context",
]
