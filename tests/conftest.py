# tests/conftest.py
import sys
import asyncio
import itertools
from pathlib import Path

import pytest

# Add src to path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from mcp_browser_sessions.actions.commands import parse_action
from mcp_browser_sessions.cleaners import extract_interactives, extract_text
from mcp_browser_sessions.context import BrowserContext, reset_context, set_context
from mcp_browser_sessions.dispatch import ToolEngine
from mcp_browser_sessions.registry import SessionRegistry

## We DO NOT want to use pytest-asyncio.
## Instead, use event_loop.run_until_complete()!


PAGE_HTML = """
<html>
  <head><title>Fake</title><script>var tracking = 1;</script></head>
  <body>
    <h1>Hello World</h1>
    <p>Welcome to the fake page.</p>
    <form id="search">
      <input name="q" placeholder="Search products">
      <button type="submit">Search</button>
    </form>
    <a href="/about">About us</a>
  </body>
</html>
"""


class FakePage:
    """In-memory stand-in for a Selenium page."""

    def __init__(self, url="about:blank", html=PAGE_HTML):
        self.current_url = url
        self.html = html
        self.actions = []
        self.events = []
        self.url_error = None
        self.url_delay = 0.0
        self.goto_error = None
        self.wait_error = None

    async def goto(self, url):
        if self.goto_error is not None:
            raise self.goto_error
        self.events.append("goto")
        self.current_url = url

    async def url(self):
        if self.url_delay:
            await asyncio.sleep(self.url_delay)
        if self.url_error is not None:
            raise self.url_error
        return self.current_url

    async def title(self):
        return "Fake"

    async def act(self, action, variables=None):
        command = parse_action(action, variables)
        self.actions.append(command)
        return command.describe()

    async def extract(self, instruction, selector=None):
        self.events.append("extract")
        text, _ = extract_text(self.html, selector=selector)
        return text

    async def observe(self, instruction):
        self.events.append("observe")
        return extract_interactives(self.html, instruction)

    async def screenshot(self):
        return b"\x89PNG\r\n\x1a\nfake-png"

    async def wait_for_network_idle(self, timeout):
        self.events.append("wait")
        if self.wait_error is not None:
            raise self.wait_error
        return True


class FakeDriver:
    def __init__(self, session_id, page=None):
        self.session_id = session_id
        self._page = page if page is not None else FakePage()
        self.page_closed = False
        self.close_calls = 0
        self.close_error = None

    @property
    def page(self):
        if self.page_closed:
            return None
        return self._page

    async def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class FakeDriverFactory:
    """Driver factory recording every call; can fail or be slowed down."""

    def __init__(self, fail=None, delay=0.0):
        self.fail = fail
        self.delay = delay
        self.calls = 0
        self.configs = []
        self.drivers = []

    async def __call__(self, config=None):
        self.calls += 1
        self.configs.append(config)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail is not None:
            raise self.fail
        driver = FakeDriver(f"driver-{self.calls}")
        self.drivers.append(driver)
        return driver


def sequential_ids():
    counter = itertools.count(1)
    return lambda: f"s{next(counter)}"


@pytest.fixture(scope="function")
def event_loop():
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    yield loop
    loop.close()


@pytest.fixture
def driver_factory():
    return FakeDriverFactory()


@pytest.fixture
def registry(driver_factory):
    return SessionRegistry(driver_factory=driver_factory, id_factory=sequential_ids())


@pytest.fixture
def context(registry):
    ctx = BrowserContext(registry=registry)
    set_context(ctx)
    yield ctx
    reset_context()


@pytest.fixture
def engine(context):
    return ToolEngine(context=context, network_idle_timeout=0.1)


@pytest.fixture
def call_tool(engine, event_loop):
    """Run one tool call to completion and return its ToolOutcome."""
    def _call(name, arguments=None):
        return event_loop.run_until_complete(engine.dispatch(name, arguments or {}))
    return _call
