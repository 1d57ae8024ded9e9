from typing import NamedTuple

from appium.webdriver.common.appiumby import AppiumBy

APP_PACKAGE = "com.saucelabs.mydemoapp.android"


class Locator(NamedTuple):
    # A (by, value) pair usable directly with find_element(*locator) and expected_conditions
    by: str
    value: str

    def format(self, **kwargs) -> "Locator":
        # Fill a templated value, e.g. an XPath that names a product
        return Locator(self.by, self.value.format(**kwargs))

    def __str__(self) -> str:
        return f"{self.by}={self.value}"


def by_id(resource_id: str) -> Locator:
    # Bare ids are expanded to the app's resource-id namespace
    if ":id/" not in resource_id:
        resource_id = f"{APP_PACKAGE}:id/{resource_id}"
    return Locator(AppiumBy.ID, resource_id)


def by_xpath(expression: str) -> Locator:
    return Locator(AppiumBy.XPATH, expression)


def by_text(text: str) -> Locator:
    return by_xpath(f"//android.widget.TextView[@text='{text}']")
