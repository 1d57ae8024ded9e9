"""
Interaction primitives shared by every page object.

Pages hold an InteractionSession instead of inheriting these helpers, so the
same page code runs against a real Appium driver or a test double.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional

from appium.webdriver.webdriver import WebDriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as ec
from selenium.webdriver.support.ui import WebDriverWait

from core.config import SessionSettings
from core.locators import Locator


logger = logging.getLogger(__name__)

DEFAULT_SCROLL_OFFSET = 500
DEFAULT_SWIPE_DURATION_MS = 500
DEFAULT_MAX_SWIPES = 5


@dataclass(frozen=True)
class ElementLookup:
    # Outcome of a single lookup: the element, or the reason it is missing
    locator: Locator
    element: Optional[WebElement] = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.element is not None

    def __bool__(self) -> bool:
        return self.found

    @classmethod
    def missing(cls, locator: Locator, error: Exception) -> "ElementLookup":
        return cls(locator=locator, error=f"{type(error).__name__}: {error}")


class InteractionSession:
    """Wait, act and query helpers bound to one driver."""

    def __init__(
        self,
        driver: WebDriver,
        explicit_wait: int = 20,
        implicit_wait: int = 10,
        scroll_offset: int = DEFAULT_SCROLL_OFFSET,
        max_swipes: int = DEFAULT_MAX_SWIPES,
    ):
        self.driver = driver
        self.explicit_wait = explicit_wait
        self.implicit_wait = implicit_wait
        self.scroll_offset = scroll_offset
        self.max_swipes = max_swipes

    @classmethod
    def from_settings(cls, driver: WebDriver, settings: SessionSettings) -> "InteractionSession":
        return cls(
            driver,
            explicit_wait=settings.explicit_wait,
            implicit_wait=settings.implicit_wait,
        )

    # Waits

    def _wait(self, timeout: Optional[float] = None) -> WebDriverWait:
        return WebDriverWait(self.driver, self.explicit_wait if timeout is None else timeout)

    def wait_for_visible(self, locator: Locator, timeout: Optional[float] = None) -> WebElement:
        logger.debug(f"Waiting for visible element: {locator}")
        return self._wait(timeout).until(
            ec.visibility_of_element_located(locator),
            message=f"Element not visible: {locator}",
        )

    def wait_for_clickable(self, locator: Locator, timeout: Optional[float] = None) -> WebElement:
        logger.debug(f"Waiting for clickable element: {locator}")
        return self._wait(timeout).until(
            ec.element_to_be_clickable(locator),
            message=f"Element not clickable: {locator}",
        )

    def wait_for_invisible(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        logger.debug(f"Waiting for element to disappear: {locator}")
        return bool(self._wait(timeout).until(
            ec.invisibility_of_element_located(locator),
            message=f"Element still visible: {locator}",
        ))

    # Actions

    def click(self, locator: Locator) -> None:
        logger.debug(f"Clicking element: {locator}")
        self.wait_for_clickable(locator).click()

    def type_text(self, locator: Locator, text: str, sensitive: bool = False) -> None:
        shown = "********" if sensitive else text
        logger.debug(f"Typing '{shown}' into element: {locator}")
        element = self.wait_for_visible(locator)
        element.clear()
        element.send_keys(text)

    def clear(self, locator: Locator) -> None:
        logger.debug(f"Clearing element: {locator}")
        self.wait_for_visible(locator).clear()

    def get_text(self, locator: Locator) -> str:
        return self.wait_for_visible(locator).text

    def get_attribute(self, locator: Locator, name: str) -> Optional[str]:
        logger.debug(f"Reading attribute '{name}' of element: {locator}")
        return self.wait_for_visible(locator).get_attribute(name)

    def pause(self, milliseconds: int) -> None:
        time.sleep(milliseconds / 1000)

    # Queries that never raise

    def find(self, locator: Locator) -> ElementLookup:
        try:
            return ElementLookup(locator=locator, element=self.driver.find_element(*locator))
        except WebDriverException as e:
            logger.debug(f"Element not found: {locator}")
            return ElementLookup.missing(locator, e)

    def find_all(self, locator: Locator) -> List[WebElement]:
        try:
            return list(self.driver.find_elements(*locator))
        except WebDriverException as e:
            logger.debug(f"Lookup failed for {locator}: {e}")
            return []

    def texts_of(self, locator: Locator) -> List[str]:
        texts = []
        for element in self.find_all(locator):
            try:
                texts.append(element.text)
            except WebDriverException:
                # Element went stale between lookup and read
                continue
        return texts

    def is_present(self, locator: Locator) -> bool:
        return self.find(locator).found

    def is_visible(self, locator: Locator) -> bool:
        lookup = self.find(locator)
        if not lookup:
            return False
        try:
            return lookup.element.is_displayed()
        except WebDriverException:
            logger.debug(f"Element not visible: {locator}")
            return False

    def is_enabled(self, locator: Locator) -> bool:
        lookup = self.find(locator)
        if not lookup:
            return False
        try:
            return lookup.element.is_enabled()
        except WebDriverException:
            logger.debug(f"Element not enabled: {locator}")
            return False

    def is_currently_visible(self, locator: Locator) -> bool:
        # Immediate check, without waiting out the implicit timeout
        try:
            with self.without_implicit_wait():
                return self.is_visible(locator)
        except WebDriverException as e:
            logger.debug(f"Could not toggle implicit wait for {locator}: {e}")
            return False

    def is_text_present(self, text: str) -> bool:
        try:
            return text in self.driver.page_source
        except WebDriverException:
            logger.debug(f"Text not present: {text}")
            return False

    @contextmanager
    def without_implicit_wait(self) -> Iterator[None]:
        self.driver.implicitly_wait(0)
        try:
            yield
        finally:
            self.driver.implicitly_wait(self.implicit_wait)

    # Gestures

    def _swipe_vertically(self, offset: int) -> None:
        size = self.driver.get_window_size()
        x = size["width"] // 2
        center_y = size["height"] // 2
        start_y = center_y + offset // 2
        end_y = center_y - offset // 2
        self.driver.swipe(x, start_y, x, end_y, DEFAULT_SWIPE_DURATION_MS)

    def scroll_down(self) -> None:
        # Finger moves up, content moves down the list
        logger.debug("Scrolling down")
        self._swipe_vertically(self.scroll_offset)

    def scroll_up(self) -> None:
        logger.debug("Scrolling up")
        self._swipe_vertically(-self.scroll_offset)

    def scroll_to_element(self, locator: Locator) -> bool:
        """Swipe down until the element is visible.

        Returns False after max_swipes attempts without finding it.
        """
        logger.debug(f"Scrolling to element: {locator}")
        for _ in range(self.max_swipes):
            if self.is_currently_visible(locator):
                return True
            try:
                self.scroll_down()
            except WebDriverException as e:
                logger.debug(f"Swipe failed while looking for {locator}: {e}")
                return False
        return self.is_currently_visible(locator)

    # Evidence

    def screenshot_png(self) -> Optional[bytes]:
        try:
            return self.driver.get_screenshot_as_png()
        except WebDriverException as e:
            logger.warning(f"Could not capture screenshot: {e}")
            return None
