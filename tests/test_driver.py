"""Selenium adapter tests against a mocked WebDriver (no browser is started)."""

from unittest.mock import MagicMock, PropertyMock

import pytest
from selenium.common.exceptions import NoSuchWindowException

import mcp_browser_sessions.browser.driver as driver_mod
from mcp_browser_sessions.browser.driver import SeleniumDriver, SeleniumPage, create_driver
from mcp_browser_sessions.errors import DriverInitError


HTML = """
<html><body>
  <div class="ad-banner">Buy now!</div>
  <main><h1>Quarterly report</h1><p class="summary">Revenue grew 12%.</p></main>
  <button aria-label="Download PDF"></button>
</body></html>
"""


def make_webdriver(html=HTML, url="https://example.com/report"):
    wd = MagicMock()
    wd.execute_script.return_value = html
    wd.current_url = url
    wd.title = "Report"
    wd.session_id = "abc123"
    wd.get_screenshot_as_png.return_value = b"\x89PNG..."
    return wd


class TestSeleniumPage:

    def test_url_and_title(self, event_loop):
        page = SeleniumPage(make_webdriver())
        assert event_loop.run_until_complete(page.url()) == "https://example.com/report"
        assert event_loop.run_until_complete(page.title()) == "Report"

    def test_extract_whole_page(self, event_loop):
        text = event_loop.run_until_complete(SeleniumPage(make_webdriver()).extract("report"))
        assert "Quarterly report" in text
        assert "Revenue grew 12%." in text
        assert "Buy now!" not in text

    def test_extract_with_selector(self, event_loop):
        text = event_loop.run_until_complete(SeleniumPage(make_webdriver()).extract("summary", selector=".summary"))
        assert text == "Revenue grew 12%."

    def test_extract_selector_without_match(self, event_loop):
        with pytest.raises(ValueError, match="No content matched selector"):
            event_loop.run_until_complete(SeleniumPage(make_webdriver()).extract("x", selector="table"))

    def test_extract_truncates(self, event_loop, monkeypatch):
        monkeypatch.setattr(driver_mod, "MAX_EXTRACT_CHARS", 10)
        text = event_loop.run_until_complete(SeleniumPage(make_webdriver()).extract("report"))
        assert text.endswith("[truncated at 10 characters]")

    def test_observe(self, event_loop):
        items = event_loop.run_until_complete(SeleniumPage(make_webdriver()).observe("download"))
        assert items == [{"description": "button: Download PDF", "selector": "html > body > button", "method": "click"}]

    def test_act_scroll(self, event_loop):
        wd = make_webdriver()
        performed = event_loop.run_until_complete(SeleniumPage(wd).act("scroll down 500"))
        assert performed == "scrolled down 500px"
        wd.execute_script.assert_called_with("window.scrollBy(0, 500);")

    def test_act_rejects_unknown_form_before_touching_browser(self, event_loop):
        wd = make_webdriver()
        with pytest.raises(ValueError, match="Unsupported action"):
            event_loop.run_until_complete(SeleniumPage(wd).act("juggle"))
        wd.execute_script.assert_not_called()

    def test_screenshot(self, event_loop):
        assert event_loop.run_until_complete(SeleniumPage(make_webdriver()).screenshot()) == b"\x89PNG..."

    def test_wait_for_network_idle(self, event_loop):
        wd = make_webdriver()
        wd.execute_script.return_value = "complete"
        assert event_loop.run_until_complete(SeleniumPage(wd).wait_for_network_idle(1)) is True

    def test_lost_window_closes_page(self, event_loop):
        wd = make_webdriver()
        type(wd).current_url = PropertyMock(side_effect=NoSuchWindowException("window gone"))
        driver = SeleniumDriver(wd)
        page = driver.page

        with pytest.raises(NoSuchWindowException):
            event_loop.run_until_complete(page.url())

        assert page.closed is True
        assert driver.page is None


class TestSeleniumDriver:

    def test_session_id(self):
        assert SeleniumDriver(make_webdriver()).session_id == "abc123"

    def test_close_quits_once(self, event_loop):
        wd = make_webdriver()
        driver = SeleniumDriver(wd)

        event_loop.run_until_complete(driver.close())
        event_loop.run_until_complete(driver.close())

        wd.quit.assert_called_once()
        assert driver.page is None

    def test_failed_quit_kills_process_tree(self, event_loop, monkeypatch):
        killed = []
        monkeypatch.setattr(driver_mod, "_kill_service_process_tree", lambda wd: killed.append(wd))
        wd = make_webdriver()
        wd.quit.side_effect = RuntimeError("chromedriver unreachable")

        event_loop.run_until_complete(SeleniumDriver(wd).close())

        assert killed == [wd]


class FakeChrome:
    instances = []

    def __init__(self, service=None, options=None):
        self.service = service
        self.options = options
        self.page_load_timeout = None
        FakeChrome.instances.append(self)

    def set_page_load_timeout(self, secs):
        self.page_load_timeout = secs


class TestCreateDriver:

    def setup_method(self):
        FakeChrome.instances = []

    def test_launch_options(self, event_loop, monkeypatch):
        monkeypatch.setattr(driver_mod.webdriver, "Chrome", FakeChrome)
        monkeypatch.delenv("CHROME_EXTRA_ARGS", raising=False)

        driver = event_loop.run_until_complete(create_driver({
            "headless": True,
            "width": 800,
            "height": 600,
            "user_agent": "test-agent",
            "extra_args": ["--lang=de"],
            "page_load_timeout": 15,
        }))

        chrome = FakeChrome.instances[0]
        args = chrome.options.arguments
        assert "--headless=new" in args
        assert "--window-size=800,600" in args
        assert "--user-agent=test-agent" in args
        assert "--lang=de" in args
        assert chrome.page_load_timeout == 15
        assert driver.webdriver is chrome

    def test_startup_failure_is_wrapped(self, event_loop, monkeypatch):
        def boom(config):
            raise RuntimeError("cannot find Chrome binary")
        monkeypatch.setattr(driver_mod, "create_webdriver", boom)

        with pytest.raises(DriverInitError, match="Failed to start browser: cannot find Chrome binary"):
            event_loop.run_until_complete(create_driver())

    def test_unknown_config_key(self, event_loop, monkeypatch):
        monkeypatch.setattr(driver_mod.webdriver, "Chrome", FakeChrome)

        with pytest.raises(DriverInitError, match="Unknown session config option: proxy"):
            event_loop.run_until_complete(create_driver({"proxy": "x"}))
        assert FakeChrome.instances == []
