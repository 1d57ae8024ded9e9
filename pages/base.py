import logging
from abc import ABC, abstractmethod
from typing import Tuple

from core.interaction import InteractionSession
from core.locators import Locator


class BasePage(ABC):
    # Contract for a screen of the app; behaviour comes from the held session

    # Elements whose visibility means the screen finished loading
    REQUIRED_ELEMENTS: Tuple[Locator, ...] = ()

    def __init__(self, session: InteractionSession):
        self.session = session
        self.logger = logging.getLogger(type(self).__module__)

    @abstractmethod
    def is_page_loaded(self) -> bool:
        ...

    def wait_for_page_to_load(self) -> None:
        self.logger.debug(f"Esperando que {type(self).__name__} se cargue completamente")
        for locator in self.REQUIRED_ELEMENTS:
            self.session.wait_for_visible(locator)

    def _all_visible(self, *locators: Locator) -> bool:
        return all(self.session.is_visible(locator) for locator in locators)
