"""Keyboard input and scrolling."""

from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.keys import Keys


def resolve_key(name: str) -> str:
    """Map a key name such as ENTER or page_down to a Selenium key."""
    key = getattr(Keys, name.strip().upper().replace(" ", "_"), None)
    if key is None:
        raise ValueError(f"Unknown key: {name}")
    return key


def send_keys(driver, key_name: str) -> None:
    """Send a single named key to the focused element."""
    ActionChains(driver).send_keys(resolve_key(key_name)).perform()


def scroll(driver, direction: str = "down", amount: int = 300) -> None:
    """Scroll the page."""
    if direction == "down":
        driver.execute_script(f"window.scrollBy(0, {int(amount)});")
    elif direction == "up":
        driver.execute_script(f"window.scrollBy(0, -{int(amount)});")
    elif direction == "top":
        driver.execute_script("window.scrollTo(0, 0);")
    elif direction == "bottom":
        driver.execute_script("window.scrollTo(0, document.body.scrollHeight);")
    else:
        raise ValueError(f"Unknown scroll direction: {direction}")


__all__ = [
    "resolve_key",
    "send_keys",
    "scroll",
]
