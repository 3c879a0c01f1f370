"""WebDriver creation and the async page/driver handles built on it."""

import os
import uuid
import asyncio
import tempfile
from typing import List, Mapping, Optional

import psutil
from selenium import webdriver
from selenium.common.exceptions import NoSuchWindowException

from ..actions.commands import parse_action, perform_action
from ..actions.navigation import navigate_to_url, wait_document_complete
from ..cleaners import extract_text, extract_interactives
from ..config import get_env_config, merge_session_config
from ..constants import MAX_EXTRACT_CHARS, MAX_OBSERVATIONS
from ..errors import DriverInitError

import logging
logger = logging.getLogger(__name__)


def chromedriver_log_path() -> str:
    """Get a fresh chromedriver log path for one browser."""
    return os.path.join(tempfile.gettempdir(), f"chromedriver_{os.getpid()}_{uuid.uuid4().hex[:8]}.log")


def create_webdriver(config: dict) -> webdriver.Chrome:
    """Launch a Chrome instance with its own temporary profile (blocking)."""
    from selenium.webdriver.chrome.options import Options
    from selenium.webdriver.chrome.service import Service as ChromeService

    options = Options()
    chrome_path = config.get("chrome_path")
    if chrome_path:
        options.binary_location = chrome_path
    if config.get("headless"):
        options.add_argument("--headless=new")
    options.add_argument(f"--window-size={int(config['width'])},{int(config['height'])}")
    options.add_argument("--no-first-run")
    options.add_argument("--no-default-browser-check")
    if config.get("user_agent"):
        options.add_argument(f"--user-agent={config['user_agent']}")
    for arg in config.get("extra_args") or []:
        options.add_argument(arg)

    service = ChromeService(log_output=chromedriver_log_path())
    driver = webdriver.Chrome(service=service, options=options)
    driver.set_page_load_timeout(int(config.get("page_load_timeout") or 30))
    return driver


def _kill_service_process_tree(driver: webdriver.Chrome) -> None:
    """Last resort when quit() fails: kill chromedriver and the browsers it spawned."""
    try:
        pid = driver.service.process.pid
    except AttributeError:
        return
    try:
        proc = psutil.Process(pid)
        for child in proc.children(recursive=True):
            try:
                child.kill()
            except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
                logger.debug(f"Could not kill child process: {e}")
        proc.kill()
    except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
        logger.debug(f"Could not kill chromedriver process {pid}: {e}")


def _page_source(driver: webdriver.Chrome) -> str:
    # Prefer outerHTML; fall back to page_source
    try:
        html = driver.execute_script("return document.documentElement.outerHTML") or ""
        if html:
            return html
    except NoSuchWindowException:
        raise
    except Exception as e:
        logger.debug(f"outerHTML unavailable, using page_source: {e}")
    return driver.page_source or ""


class SeleniumPage:
    """Async view of the Selenium window currently in focus."""

    def __init__(self, driver: webdriver.Chrome):
        self._driver = driver
        self.closed = False

    async def _run(self, fn, *args, **kwargs):
        if self.closed:
            raise NoSuchWindowException("Page has been closed")
        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except NoSuchWindowException:
            self.closed = True
            raise

    async def goto(self, url: str) -> None:
        await self._run(navigate_to_url, self._driver, url)

    async def url(self) -> str:
        return await self._run(lambda: self._driver.current_url)

    async def title(self) -> str:
        return await self._run(lambda: self._driver.title)

    async def act(self, action: str, variables: Optional[Mapping[str, str]] = None) -> str:
        command = parse_action(action, variables)
        await self._run(perform_action, self._driver, command)
        return command.describe()

    async def extract(self, instruction: str, selector: Optional[str] = None) -> str:
        html = await self._run(_page_source, self._driver)
        text, truncated = extract_text(html, selector=selector, max_chars=MAX_EXTRACT_CHARS)
        if selector and not text:
            raise ValueError(f"No content matched selector {selector!r}")
        if truncated:
            text += f"\n[truncated at {MAX_EXTRACT_CHARS} characters]"
        return text

    async def observe(self, instruction: str) -> List[dict]:
        html = await self._run(_page_source, self._driver)
        return extract_interactives(html, instruction, max_items=MAX_OBSERVATIONS)

    async def screenshot(self) -> bytes:
        return await self._run(self._driver.get_screenshot_as_png)

    async def wait_for_network_idle(self, timeout: float) -> bool:
        return await self._run(wait_document_complete, self._driver, timeout)


class SeleniumDriver:
    """A Chrome instance owned by one session."""

    def __init__(self, driver: webdriver.Chrome):
        self._webdriver = driver
        self._page = SeleniumPage(driver)
        self._closed = False

    @property
    def webdriver(self) -> webdriver.Chrome:
        return self._webdriver

    @property
    def session_id(self) -> Optional[str]:
        return getattr(self._webdriver, "session_id", None)

    @property
    def page(self) -> Optional[SeleniumPage]:
        if self._closed or self._page.closed:
            return None
        return self._page

    async def close(self) -> None:
        """Quit the browser. Failures are logged, never raised."""
        if self._closed:
            return
        self._closed = True
        try:
            await asyncio.to_thread(self._webdriver.quit)
        except Exception as e:
            logger.warning(f"Driver quit failed, killing chromedriver instead: {e}")
            try:
                await asyncio.to_thread(_kill_service_process_tree, self._webdriver)
            except Exception as kill_err:
                logger.warning(f"Could not kill chromedriver: {kill_err}")


async def create_driver(config: Optional[dict] = None) -> SeleniumDriver:
    """Start a browser using environment defaults overlaid with `config`."""
    try:
        merged = merge_session_config(get_env_config(), config)
        wd = await asyncio.to_thread(create_webdriver, merged)
    except Exception as e:
        raise DriverInitError(f"Failed to start browser: {e}") from e
    return SeleniumDriver(wd)


__all__ = [
    "chromedriver_log_path",
    "create_webdriver",
    "create_driver",
    "SeleniumPage",
    "SeleniumDriver",
]
