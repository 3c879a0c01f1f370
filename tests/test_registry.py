import asyncio

import pytest

from mcp_browser_sessions.errors import DriverInitError
from mcp_browser_sessions.registry import SessionRegistry, make_session_id

from conftest import FakeDriverFactory


class TestSessionRegistry:

    def test_create_assigns_unique_ids(self, registry, driver_factory, event_loop):
        records = [event_loop.run_until_complete(registry.create()) for _ in range(3)]

        assert [r.id for r in records] == ["s1", "s2", "s3"]
        assert len(registry) == 3
        assert driver_factory.calls == 3
        # Each record owns its own driver
        assert len({id(r.driver) for r in records}) == 3

    def test_concurrent_creates_never_collide(self, registry, event_loop):
        async def scenario():
            return await asyncio.gather(*(registry.create() for _ in range(5)))

        records = event_loop.run_until_complete(scenario())
        ids = [r.id for r in records]
        assert len(set(ids)) == 5
        assert sorted(r.id for r in registry.list()) == sorted(ids)

    def test_default_ids_are_opaque_strings(self, event_loop):
        reg = SessionRegistry(driver_factory=FakeDriverFactory())
        record = event_loop.run_until_complete(reg.create())
        assert record.id.startswith("session_")
        assert make_session_id() != make_session_id()

    def test_ids_are_never_reused(self, event_loop):
        ids = iter(["a", "a", "b"])
        reg = SessionRegistry(driver_factory=FakeDriverFactory(), id_factory=lambda: next(ids))

        first = event_loop.run_until_complete(reg.create())
        event_loop.run_until_complete(reg.close(first.id))
        second = event_loop.run_until_complete(reg.create())

        assert first.id == "a"
        assert second.id == "b"

    def test_config_is_passed_to_driver_factory(self, registry, driver_factory, event_loop):
        record = event_loop.run_until_complete(registry.create({"headless": True, "width": 800}))
        assert driver_factory.configs == [{"headless": True, "width": 800}]
        assert record.config == {"headless": True, "width": 800}

    def test_get_is_a_pure_lookup(self, registry, driver_factory):
        assert registry.get("missing") is None
        assert "missing" not in registry
        assert driver_factory.calls == 0

    def test_close_is_idempotent(self, registry, event_loop):
        record = event_loop.run_until_complete(registry.create())

        assert event_loop.run_until_complete(registry.close(record.id)) is True
        assert event_loop.run_until_complete(registry.close(record.id)) is False
        assert record.driver.close_calls == 1
        assert registry.get(record.id) is None
        assert record.closed is True
        assert record.page is None

    def test_list_follows_creation_order_and_live_set(self, registry, event_loop):
        for _ in range(3):
            event_loop.run_until_complete(registry.create())
        event_loop.run_until_complete(registry.close("s2"))

        assert [r.id for r in registry.list()] == ["s1", "s3"]

    def test_close_swallows_driver_errors(self, registry, event_loop):
        record = event_loop.run_until_complete(registry.create())
        record.driver.close_error = RuntimeError("quit failed")

        assert event_loop.run_until_complete(registry.close(record.id)) is True
        assert registry.get(record.id) is None

    def test_close_all(self, registry, event_loop):
        for _ in range(2):
            event_loop.run_until_complete(registry.create())

        assert event_loop.run_until_complete(registry.close_all()) == 2
        assert registry.list() == []

    def test_driver_failure_is_wrapped(self, event_loop):
        reg = SessionRegistry(driver_factory=FakeDriverFactory(fail=RuntimeError("chrome not found")))

        with pytest.raises(DriverInitError) as excinfo:
            event_loop.run_until_complete(reg.create())

        assert "chrome not found" in str(excinfo.value)
        assert len(reg) == 0

    def test_driver_init_error_passes_through(self, event_loop):
        reg = SessionRegistry(driver_factory=FakeDriverFactory(fail=DriverInitError("Failed to start browser: x")))

        with pytest.raises(DriverInitError, match="Failed to start browser: x"):
            event_loop.run_until_complete(reg.create())
