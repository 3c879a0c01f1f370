"""Navigation and page readiness."""

import time

from selenium.common.exceptions import NoSuchWindowException
from selenium.webdriver.support.ui import WebDriverWait

from ..constants import DOCUMENT_READY_TIMEOUT_SECS, SNAPSHOT_SETTLE_MS

import logging
logger = logging.getLogger(__name__)


def wait_document_ready(driver, timeout: float = DOCUMENT_READY_TIMEOUT_SECS) -> bool:
    """Wait for the DOM to be interactive. Returns False on timeout (not fatal)."""
    try:
        WebDriverWait(driver, timeout).until(
            lambda d: d.execute_script("return document.readyState") in ("interactive", "complete")
        )
        return True
    except NoSuchWindowException:
        raise
    except Exception as e:
        logger.debug(f"Document not ready after {timeout}s: {e}")
        return False


def wait_document_complete(driver, timeout: float, settle_ms: int = SNAPSHOT_SETTLE_MS) -> bool:
    """
    Wait for readyState == complete, then apply the settle delay.

    Selenium exposes no network idle signal; a complete document followed by
    a short settle is the closest equivalent.
    """
    try:
        WebDriverWait(driver, timeout).until(
            lambda d: d.execute_script("return document.readyState") == "complete"
        )
        ready = True
    except NoSuchWindowException:
        raise
    except Exception as e:
        logger.debug(f"Document not complete after {timeout}s: {e}")
        ready = False
    if settle_ms > 0:
        time.sleep(settle_ms / 1000.0)
    return ready


def navigate_to_url(driver, url: str) -> None:
    """Navigate to URL and wait until the DOM is interactive."""
    driver.get(url)
    wait_document_ready(driver)


__all__ = [
    "wait_document_ready",
    "wait_document_complete",
    "navigate_to_url",
]
