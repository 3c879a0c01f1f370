"""Element finding and interaction."""

from typing import Tuple

from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from selenium.common.exceptions import ElementClickInterceptedException


SELECTOR_PREFIXES = {
    "css": By.CSS_SELECTOR,
    "xpath": By.XPATH,
    "id": By.ID,
    "name": By.NAME,
    "text": By.LINK_TEXT,
    "partial_text": By.PARTIAL_LINK_TEXT,
}


def parse_selector(selector: str) -> Tuple[str, str]:
    """
    Split an optional strategy prefix off a selector.

    "xpath=//a" -> (By.XPATH, "//a"); bare selectors are CSS, except those
    starting with "/" or "(" which are treated as XPath.
    """
    selector = (selector or "").strip()
    if not selector:
        raise ValueError("Empty selector")

    prefix, sep, rest = selector.partition("=")
    if sep and prefix.lower() in SELECTOR_PREFIXES and rest.strip():
        return SELECTOR_PREFIXES[prefix.lower()], rest.strip()

    if selector.startswith("/") or selector.startswith("("):
        return By.XPATH, selector
    return By.CSS_SELECTOR, selector


def find_element(driver, selector: str, timeout: float = 10.0, visible_only: bool = False):
    """Locate an element, waiting up to `timeout` seconds."""
    by, value = parse_selector(selector)
    wait = WebDriverWait(driver, timeout)
    if visible_only:
        return wait.until(EC.visibility_of_element_located((by, value)))
    return wait.until(EC.presence_of_element_located((by, value)))


def click_element(driver, selector: str, timeout: float = 10.0) -> None:
    """Click an element, falling back to a JavaScript click when intercepted."""
    el = find_element(driver, selector, timeout=timeout, visible_only=True)
    try:
        WebDriverWait(driver, timeout).until(lambda d: el.is_displayed() and el.is_enabled())
        el.click()
    except ElementClickInterceptedException:
        driver.execute_script("arguments[0].click();", el)


def fill_text(driver, selector: str, text: str, clear_first: bool = True, timeout: float = 10.0) -> None:
    """Fill text into an input element."""
    el = find_element(driver, selector, timeout=timeout, visible_only=True)
    if clear_first:
        el.clear()
    el.send_keys(text)


__all__ = [
    "SELECTOR_PREFIXES",
    "parse_selector",
    "find_element",
    "click_element",
    "fill_text",
]
