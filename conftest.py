import logging
import os
from functools import partial
from typing import Dict, List, Optional, Tuple

import allure
import pytest
from dotenv import load_dotenv
from selenium.common.exceptions import NoSuchElementException

from core.config import JourneyData, SessionSettings
from core.driver_manager import AppiumDriverManager
from core.interaction import InteractionSession
from core.lifecycle import ScenarioLifecycle
from core.reporting import write_environment_properties
from exceptions import (
    ConfigurationError,
    configure_error_logging,
    log_error_with_context,
)
from pages import CartPage, CheckoutPage, InventoryPage, LoginPage
from steps.context import JourneyContext

# Load environment variables from .env file
load_dotenv()

# Configure structured error logging with security features
configure_error_logging(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format_type=os.getenv("LOG_FORMAT", "json"),
    log_file=os.getenv("LOG_FILE") or None,
    enable_security=True,
)

# Step vocabulary shared by every feature file
pytest_plugins = [
    "steps.common_steps",
    "steps.login_steps",
    "steps.cart_steps",
    "steps.checkout_steps",
]

logger = logging.getLogger(__name__)

JOURNEY_LABELS = {"reto1": "Reto 1", "reto2": "Reto 2"}


# --- Configuration ---


@pytest.fixture(scope="session")
def settings() -> SessionSettings:
    # Fails the session early with an actionable message on bad configuration
    try:
        return SessionSettings.from_env()
    except ConfigurationError as e:
        correlation_id = log_error_with_context(e, e.error_context, level="error")
        raise pytest.UsageError(
            f"\n\nConfiguration Error [correlation_id: {correlation_id}]:\n{e.get_actionable_message()}\n"
        )


@pytest.fixture(scope="session")
def journey_data() -> JourneyData:
    return JourneyData.from_env()


@pytest.fixture(scope="session", autouse=True)
def environment_reporter(request: pytest.FixtureRequest):
    # Writes environment.properties for Allure once per session when --alluredir is set
    allure_dir = request.config.getoption("--alluredir", default=None)
    if not allure_dir:
        return
    write_environment_properties(allure_dir, request.getfixturevalue("settings"))


# --- Driver and pages ---


@pytest.fixture(scope="session")
def driver_manager(settings: SessionSettings):
    # One manager per test process; scenario hooks open and close its session
    manager = AppiumDriverManager(settings)
    try:
        yield manager
    finally:
        # Safety net for scenarios aborted before their after-hook ran
        manager.quit()


@pytest.fixture
def scenario_lifecycle(driver_manager: AppiumDriverManager) -> ScenarioLifecycle:
    return ScenarioLifecycle(driver_manager)


@pytest.fixture
def mobile_session(driver_manager: AppiumDriverManager, settings: SessionSettings) -> InteractionSession:
    return InteractionSession.from_settings(driver_manager.get_or_create_driver(), settings)


@pytest.fixture
def login_page(mobile_session: InteractionSession) -> LoginPage:
    return LoginPage(mobile_session)


@pytest.fixture
def inventory_page(mobile_session: InteractionSession) -> InventoryPage:
    return InventoryPage(mobile_session)


@pytest.fixture
def cart_page(mobile_session: InteractionSession) -> CartPage:
    return CartPage(mobile_session)


@pytest.fixture
def checkout_page(mobile_session: InteractionSession) -> CheckoutPage:
    return CheckoutPage(mobile_session)


@pytest.fixture
def journey(request: pytest.FixtureRequest, journey_data: JourneyData) -> JourneyContext:
    label = next(
        (text for marker, text in JOURNEY_LABELS.items() if request.node.get_closest_marker(marker)),
        "Escenario",
    )
    return JourneyContext(data=journey_data, label=label)


# --- Scenario hooks ---


def pytest_bdd_before_scenario(request, feature, scenario):
    allure.dynamic.feature(feature.name)
    allure.dynamic.story(scenario.name)
    allure.dynamic.title(scenario.name)
    lifecycle = request.getfixturevalue("scenario_lifecycle")
    lifecycle.start(scenario.name, scenario.tags)


def pytest_bdd_step_error(request, feature, scenario, step, step_func, step_func_args, exception):
    lifecycle = request.getfixturevalue("scenario_lifecycle")
    lifecycle.record_step_failure(step.name, exception)


def pytest_bdd_after_scenario(request, feature, scenario):
    lifecycle = request.getfixturevalue("scenario_lifecycle")
    status = lifecycle.finish()
    logger.info(f"Escenario '{scenario.name}' finalizado: {status}")


# --- Offline test doubles ---


class FakeElement:
    # Minimal stand-in for a WebElement, enough for expected_conditions

    def __init__(self, text: str = "", displayed: bool = True, enabled: bool = True, on_click=None):
        self.text = text
        self.displayed = displayed
        self.enabled = enabled
        self.on_click = on_click
        self.clicks = 0
        self.typed: List[str] = []
        self.attributes: Dict[str, str] = {}

    def is_displayed(self) -> bool:
        return self.displayed

    def is_enabled(self) -> bool:
        return self.enabled

    def click(self) -> None:
        self.clicks += 1
        if self.on_click:
            self.on_click()

    def clear(self) -> None:
        self.text = ""

    def send_keys(self, *value) -> None:
        text = "".join(value)
        self.typed.append(text)
        self.text += text

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)


class FakeDriver:
    # Records the calls pages make; elements are registered per (by, value) locator

    def __init__(self):
        self.elements: Dict[Tuple[str, str], List[FakeElement]] = {}
        self.implicit_waits: List[float] = []
        self.swipes: List[Tuple[int, int, int, int, int]] = []
        self.page_source = ""
        self.quit_calls = 0
        self.on_swipe = None

    def add(self, locator, *elements: FakeElement) -> FakeElement:
        elements = elements or (FakeElement(),)
        self.elements.setdefault(tuple(locator), []).extend(elements)
        return elements[0]

    def remove(self, locator) -> None:
        self.elements.pop(tuple(locator), None)

    def find_element(self, by: str, value: str) -> FakeElement:
        found = self.elements.get((by, value))
        if not found:
            raise NoSuchElementException(f"{by}={value}")
        return found[0]

    def find_elements(self, by: str, value: str) -> List[FakeElement]:
        return list(self.elements.get((by, value), []))

    def implicitly_wait(self, seconds: float) -> None:
        self.implicit_waits.append(seconds)

    def get_window_size(self) -> Dict[str, int]:
        return {"width": 1080, "height": 2400}

    def swipe(self, start_x: int, start_y: int, end_x: int, end_y: int, duration: int = 0) -> None:
        self.swipes.append((start_x, start_y, end_x, end_y, duration))
        if self.on_swipe:
            self.on_swipe(len(self.swipes))

    def get_screenshot_as_png(self) -> bytes:
        return b"\x89PNG\r\n\x1a\n"

    def quit(self) -> None:
        self.quit_calls += 1


@pytest.fixture
def fake_driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def fake_session(fake_driver: FakeDriver) -> InteractionSession:
    # Zero explicit wait so missing elements fail after a single poll
    return InteractionSession(fake_driver, explicit_wait=0, implicit_wait=0)


CATALOG = ("Sauce Labs Backpack", "Sauce Labs Bike Light", "Sauce Labs Bolt T-Shirt")
INVALID_CREDENTIALS_MESSAGE = "Provided credentials do not match any user in this service."
SHIPPING_HEADER = "Enter a shipping address"


class ScriptedDemoApp:
    """Screens of the demo app scripted on a FakeDriver.

    Taps on the fake elements move between the catalog, side menu, login,
    cart and checkout screens, so the feature files run without a device.
    With catalog_after_login=False a valid login leads to an empty screen.
    """

    def __init__(self, data: JourneyData, catalog_after_login: bool = True):
        self.data = data
        self.catalog_after_login = catalog_after_login
        self.cart: List[str] = []
        self.driver = FakeDriver()
        self.manager = AppiumDriverManager(
            SessionSettings(),
            driver_factory=lambda command_executor, options: self.driver,
        )
        self.session = InteractionSession(self.driver, explicit_wait=0, implicit_wait=0)
        self.show_catalog()

    def _put(self, locator, *elements: FakeElement) -> None:
        self.driver.remove(locator)
        self.driver.add(locator, *elements)

    def show_catalog(self) -> None:
        self.driver.elements.clear()
        self._put(InventoryPage.PRODUCT_IMAGE, FakeElement())
        self._put(InventoryPage.CART_ICON, FakeElement(on_click=self.show_cart))
        self._put(LoginPage.MENU_BUTTON, FakeElement(on_click=self.open_menu))
        self._put(InventoryPage.PRODUCT_TITLES, *[FakeElement(text=name) for name in CATALOG])
        for name in CATALOG:
            if name in self.cart:
                self._put(
                    InventoryPage.PRODUCT_REMOVE_BUTTON.format(name=name),
                    FakeElement(on_click=partial(self.remove_from_cart, name, self.show_catalog)),
                )
            else:
                self._put(
                    InventoryPage.PRODUCT_ADD_BUTTON.format(name=name),
                    FakeElement(on_click=partial(self.add_to_cart, name)),
                )
        if self.cart:
            self._put(InventoryPage.CART_BADGE, FakeElement(text=str(len(self.cart))))

    def open_menu(self) -> None:
        self._put(LoginPage.MENU_LOGIN_ITEM, FakeElement(on_click=self.show_login))

    def show_login(self) -> None:
        self.driver.elements.clear()
        self.username = self.driver.add(LoginPage.USERNAME_FIELD)
        self.password = self.driver.add(LoginPage.PASSWORD_FIELD)
        self.driver.add(LoginPage.LOGIN_BUTTON, FakeElement(on_click=self.submit_login))

    def submit_login(self) -> None:
        if (self.username.text, self.password.text) != (self.data.valid_username, self.data.valid_password):
            self._put(LoginPage.ERROR_MESSAGE, FakeElement(text=INVALID_CREDENTIALS_MESSAGE))
        elif self.catalog_after_login:
            self.show_catalog()
        else:
            self.driver.elements.clear()

    def add_to_cart(self, name: str) -> None:
        self.cart.append(name)
        self.show_catalog()

    def remove_from_cart(self, name: str, render) -> None:
        self.cart.remove(name)
        render()

    def show_cart(self) -> None:
        self.driver.elements.clear()
        self._put(CartPage.CHECKOUT_BUTTON, FakeElement(on_click=self.show_checkout))
        if self.cart:
            self._put(CartPage.ITEM_TITLES, *[FakeElement(text=name) for name in self.cart])
            self._put(
                CartPage.REMOVE_BUTTON,
                *[FakeElement(on_click=partial(self.remove_from_cart, name, self.show_cart)) for name in self.cart],
            )

    def show_checkout(self) -> None:
        self.driver.elements.clear()
        self.full_name = self.driver.add(CheckoutPage.FULL_NAME_FIELD)
        for locator in CheckoutPage.SHIPPING_FIELDS[1:]:
            self.driver.add(locator)
        self.driver.add(CheckoutPage.CHECKOUT_TITLE, FakeElement(text=SHIPPING_HEADER))
        self.driver.add(CheckoutPage.TO_PAYMENT_BUTTON, FakeElement(on_click=self.submit_shipping))

    def submit_shipping(self) -> None:
        if self.full_name.text.strip():
            self.driver.remove(CheckoutPage.ERROR_MESSAGE)
        else:
            self._put(CheckoutPage.ERROR_MESSAGE, FakeElement(text=self.data.checkout_required_message))


@pytest.fixture
def catalog_after_login() -> bool:
    return True


@pytest.fixture
def scripted_app(journey_data: JourneyData, catalog_after_login: bool):
    app = ScriptedDemoApp(journey_data, catalog_after_login)
    yield app
    # The after-scenario hook closes the session once, whether the scenario passed or failed
    assert app.driver.quit_calls == 1, f"Driver closed {app.driver.quit_calls} times"
