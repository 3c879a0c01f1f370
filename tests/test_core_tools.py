"""Tests for the single-session tools working on the default session."""

import os
import json


class TestNavigationAndUrl:

    def test_default_session_created_on_first_use(self, call_tool, driver_factory):
        assert driver_factory.calls == 0

        assert call_tool("navigate", {"url": "https://example.com"}).text == "Navigated to: https://example.com"
        assert call_tool("get-url").text == "https://example.com"
        assert driver_factory.calls == 1

    def test_get_url_failure(self, call_tool, context, event_loop):
        page = event_loop.run_until_complete(context.get_active_page())
        page.url_error = RuntimeError("disconnected")

        outcome = call_tool("get-url")
        assert outcome.is_error
        assert outcome.text == "Failed to get current URL: disconnected"

    def test_closed_page(self, call_tool, context, event_loop):
        record = event_loop.run_until_complete(context.get_default_session())
        record.driver.page_closed = True

        outcome = call_tool("navigate", {"url": "https://example.com"})
        assert outcome.is_error
        assert outcome.text == "No active page available for session s1"


class TestAct:

    def test_click(self, call_tool, context, event_loop):
        page = event_loop.run_until_complete(context.get_active_page())

        outcome = call_tool("act", {"action": "click #submit"})

        assert outcome.text == "Action performed: clicked #submit"
        assert page.actions[0].verb == "click"

    def test_variables_are_substituted_but_not_echoed(self, call_tool, context, event_loop):
        page = event_loop.run_until_complete(context.get_active_page())

        outcome = call_tool("act", {"action": "type %password% into #pw", "variables": {"password": "hunter2"}})

        assert outcome.text == "Action performed: typed into #pw"
        assert page.actions[0].text == "hunter2"
        assert "hunter2" not in outcome.text

    def test_unsupported_action(self, call_tool):
        outcome = call_tool("act", {"action": "dance wildly"})
        assert outcome.is_error
        assert outcome.text.startswith("Failed to perform action: Unsupported action")

    def test_missing_variable(self, call_tool):
        outcome = call_tool("act", {"action": "type %otp% into #code"})
        assert outcome.is_error
        assert outcome.text == "Failed to perform action: Missing value for variable %otp%"


class TestExtractAndObserve:

    def test_extract_page_text(self, call_tool):
        outcome = call_tool("extract", {"instruction": "welcome text"})

        assert outcome.text.startswith("Extracted content for: welcome text\n\n")
        assert "Welcome to the fake page." in outcome.text
        assert "tracking" not in outcome.text

    def test_observe_ranks_by_instruction(self, call_tool):
        outcome = call_tool("observe", {"instruction": "about page link"})

        assert outcome.text.startswith("Observations: ")
        observations = json.loads(outcome.text[len("Observations: "):])
        assert observations[0] == {"description": "a: About us", "selector": "html > body > a", "method": "click"}
        assert {o["method"] for o in observations} == {"click", "type"}

    def test_observe_nothing_found(self, call_tool, context, event_loop):
        page = event_loop.run_until_complete(context.get_active_page())
        page.html = "<html><body><p>static</p></body></html>"

        outcome = call_tool("observe", {"instruction": "buttons"})
        assert not outcome.is_error
        assert outcome.text == "No interactive elements found for: buttons"


class TestScreenshot:

    def test_screenshot_is_saved(self, call_tool, tmp_path, monkeypatch):
        monkeypatch.setenv("MCP_SCREENSHOT_DIR", str(tmp_path))

        outcome = call_tool("screenshot", {"name": "home page"})

        assert outcome.text.startswith("Screenshot saved to: ")
        files = os.listdir(tmp_path)
        assert len(files) == 1
        assert files[0].startswith("home_page-") and files[0].endswith(".png")
        assert (tmp_path / files[0]).read_bytes().startswith(b"\x89PNG")

    def test_screenshot_failure(self, call_tool, context, event_loop, tmp_path, monkeypatch):
        monkeypatch.setenv("MCP_SCREENSHOT_DIR", str(tmp_path))
        page = event_loop.run_until_complete(context.get_active_page())

        async def broken():
            raise RuntimeError("GPU hang")
        page.screenshot = broken

        outcome = call_tool("screenshot", {})
        assert outcome.is_error
        assert outcome.text == "Failed to take screenshot: GPU hang"


class TestDefaultSessionManagement:

    def test_create_and_close(self, call_tool, driver_factory):
        assert call_tool("session-create").text == "Browser session created: s1"
        assert call_tool("session-create").text == "Browser session already active: s1"

        assert call_tool("session-close").text == "Closed session s1"
        assert call_tool("session-close").text == "No active session to close"
        assert driver_factory.drivers[0].close_calls == 1

    def test_next_call_starts_fresh_session(self, call_tool, driver_factory):
        call_tool("navigate", {"url": "https://example.com"})
        call_tool("session-close")

        assert call_tool("get-url").text == "about:blank"
        assert driver_factory.calls == 2
