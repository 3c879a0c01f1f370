"""Browser driver: Selenium-backed implementation of the driver/page handles."""

from .base import DriverFactory, DriverHandle, PageHandle
from .driver import SeleniumDriver, SeleniumPage, create_driver

__all__ = [
    "DriverFactory",
    "DriverHandle",
    "PageHandle",
    "SeleniumDriver",
    "SeleniumPage",
    "create_driver",
]
