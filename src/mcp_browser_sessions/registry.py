"""
In-memory registry of live browser sessions.

Concurrency:
    All mutations of the id -> record mapping happen without an intervening
    await: `create` inserts in the same scheduling turn in which it allocates
    the id (after the driver is up), and `close` removes the record before it
    awaits the driver release. Concurrent callers on one event loop therefore
    never observe colliding ids or half-removed records, and no lock is needed.
"""

import uuid
import datetime
from dataclasses import dataclass, field
from typing import Callable, Dict, List, NewType, Optional

from .browser.base import DriverFactory, DriverHandle, PageHandle
from .errors import DriverInitError

import logging
logger = logging.getLogger(__name__)


SessionId = NewType("SessionId", str)


def make_session_id() -> str:
    return f"session_{uuid.uuid4().hex[:12]}"


@dataclass
class SessionRecord:
    """
    Pairs a session id with the driver it exclusively owns.

    Attributes:
        id: Registry-assigned identifier, never changes
        driver: Browser driver handle; closing the record releases it
        created_at: UTC creation time
        config: Per-session config overrides the driver was created with
    """

    id: SessionId
    driver: DriverHandle
    created_at: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc)
    )
    config: dict = field(default_factory=dict)
    closed: bool = False

    @property
    def page(self) -> Optional[PageHandle]:
        """The driver's current page, or None once the record or page is closed."""
        if self.closed:
            return None
        return self.driver.page

    async def close(self) -> None:
        """Release the driver. Best effort: failures are logged, not raised."""
        if self.closed:
            return
        self.closed = True
        try:
            await self.driver.close()
        except Exception as e:
            logger.warning(f"Error while closing session {self.id}: {e}")


class SessionRegistry:
    """Creates, tracks and tears down sessions, keyed by SessionId."""

    def __init__(
        self,
        driver_factory: Optional[DriverFactory] = None,
        id_factory: Callable[[], str] = make_session_id,
    ):
        if driver_factory is None:
            from .browser.driver import create_driver
            driver_factory = create_driver
        self._driver_factory = driver_factory
        self._id_factory = id_factory
        self._records: Dict[SessionId, SessionRecord] = {}
        self._issued: set = set()

    def _allocate_id(self) -> SessionId:
        # Ids are never reused within the registry's lifetime
        while True:
            candidate = SessionId(self._id_factory())
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

    async def create(self, config: Optional[dict] = None) -> SessionRecord:
        """
        Start a new driver and register it under a fresh id.

        Raises:
            DriverInitError: If the driver cannot be started. Not retried.
        """
        try:
            driver = await self._driver_factory(config)
        except DriverInitError:
            raise
        except Exception as e:
            raise DriverInitError(f"Failed to start browser: {e}") from e

        # No await between allocation and insertion
        session_id = self._allocate_id()
        record = SessionRecord(id=session_id, driver=driver, config=dict(config or {}))
        self._records[session_id] = record
        logger.info(f"Created browser session {session_id} (driver session {driver.session_id})")
        return record

    def get(self, session_id: str) -> Optional[SessionRecord]:
        """Pure lookup; never creates."""
        return self._records.get(SessionId(session_id))

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def list(self) -> List[SessionRecord]:
        """Snapshot of live records in creation order."""
        return list(self._records.values())

    async def close(self, session_id: str) -> bool:
        """
        Remove the record and release its driver.

        Returns:
            True if a session was closed, False if the id is unknown
            (including ids that were already closed).
        """
        record = self._records.pop(SessionId(session_id), None)
        if record is None:
            return False
        await record.close()
        logger.info(f"Closed browser session {session_id}")
        return True

    async def close_all(self) -> int:
        closed = 0
        for record in self.list():
            if await self.close(record.id):
                closed += 1
        return closed


__all__ = [
    "SessionId",
    "SessionRecord",
    "SessionRegistry",
    "make_session_id",
]
