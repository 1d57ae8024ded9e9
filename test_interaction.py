import allure
import pytest
from selenium.common.exceptions import StaleElementReferenceException, TimeoutException, WebDriverException

from conftest import FakeElement
from core.interaction import ElementLookup
from core.locators import by_id, by_text


FIELD = by_id("nameET")
MISSING = by_id("doesNotExist")


@allure.feature("Interaction Session")
class TestElementLookup:

    @allure.story("Lookups")
    @allure.title("Found lookup carries the element")
    def test_find_returns_element(self, fake_driver, fake_session):
        element = fake_driver.add(FIELD)

        lookup = fake_session.find(FIELD)

        assert lookup.found
        assert lookup.element is element
        assert lookup.error is None

    @allure.story("Lookups")
    @allure.title("Missing lookup carries the reason instead of raising")
    def test_find_missing(self, fake_session):
        lookup = fake_session.find(MISSING)

        assert not lookup
        assert lookup.element is None
        assert lookup.error.startswith("NoSuchElementException")

    @allure.story("Lookups")
    @allure.title("Missing helper records the error type")
    def test_missing_helper(self):
        lookup = ElementLookup.missing(FIELD, WebDriverException("boom"))

        assert lookup.locator == FIELD
        assert "WebDriverException" in lookup.error


@allure.feature("Interaction Session")
class TestPredicates:

    @allure.story("Predicates")
    @allure.title("Predicates return False for missing elements")
    def test_predicates_on_missing_element(self, fake_session):
        assert fake_session.is_present(MISSING) is False
        assert fake_session.is_visible(MISSING) is False
        assert fake_session.is_enabled(MISSING) is False
        assert fake_session.is_currently_visible(MISSING) is False

    @allure.story("Predicates")
    @allure.title("Hidden and disabled elements are reported as such")
    def test_hidden_and_disabled(self, fake_driver, fake_session):
        fake_driver.add(FIELD, FakeElement(displayed=False, enabled=False))

        assert fake_session.is_present(FIELD)
        assert not fake_session.is_visible(FIELD)
        assert not fake_session.is_enabled(FIELD)

    @allure.story("Predicates")
    @allure.title("Stale elements count as not visible")
    def test_stale_element_not_visible(self, fake_driver, fake_session):
        element = fake_driver.add(FIELD)

        def stale():
            raise StaleElementReferenceException("stale")

        element.is_displayed = stale

        assert fake_session.is_visible(FIELD) is False

    @allure.story("Predicates")
    @allure.title("Immediate visibility check restores the implicit wait")
    def test_is_currently_visible_restores_implicit_wait(self, fake_driver, fake_session):
        fake_session.implicit_wait = 10
        fake_driver.add(FIELD)

        assert fake_session.is_currently_visible(FIELD)
        assert fake_driver.implicit_waits == [0, 10]

    @allure.story("Predicates")
    @allure.title("Text presence is read from the page source")
    def test_is_text_present(self, fake_driver, fake_session):
        fake_driver.page_source = "<hierarchy><node text='Products'/></hierarchy>"

        assert fake_session.is_text_present("Products")
        assert not fake_session.is_text_present("Checkout")


@allure.feature("Interaction Session")
class TestActions:

    @allure.story("Actions")
    @allure.title("Typing clears the field before sending keys")
    def test_type_text_clears_then_types(self, fake_driver, fake_session):
        element = fake_driver.add(FIELD, FakeElement(text="old value"))

        fake_session.type_text(FIELD, "bob@example.com")

        assert element.text == "bob@example.com"
        assert element.typed == ["bob@example.com"]

    @allure.story("Actions")
    @allure.title("Sensitive text is not written to the log")
    def test_type_text_sensitive_is_masked(self, fake_driver, fake_session, caplog):
        fake_driver.add(FIELD)

        with caplog.at_level("DEBUG", logger="core.interaction"):
            fake_session.type_text(FIELD, "10203040my", sensitive=True)

        assert "10203040my" not in caplog.text

    @allure.story("Actions")
    @allure.title("Click waits for a clickable element")
    def test_click(self, fake_driver, fake_session):
        element = fake_driver.add(FIELD)

        fake_session.click(FIELD)

        assert element.clicks == 1

    @allure.story("Actions")
    @allure.title("Clicking a missing element times out")
    def test_click_missing_times_out(self, fake_session):
        with pytest.raises(TimeoutException):
            fake_session.click(MISSING)

    @allure.story("Actions")
    @allure.title("Disabled elements are not clickable")
    def test_click_disabled_times_out(self, fake_driver, fake_session):
        fake_driver.add(FIELD, FakeElement(enabled=False))

        with pytest.raises(TimeoutException):
            fake_session.click(FIELD)

    @allure.story("Actions")
    @allure.title("Text and attributes are read from visible elements")
    def test_get_text_and_attribute(self, fake_driver, fake_session):
        element = fake_driver.add(FIELD, FakeElement(text="Products"))
        element.attributes["content-desc"] = "title"

        assert fake_session.get_text(FIELD) == "Products"
        assert fake_session.get_attribute(FIELD, "content-desc") == "title"

    @allure.story("Actions")
    @allure.title("Texts of all matching elements")
    def test_texts_of(self, fake_driver, fake_session):
        fake_driver.add(FIELD, FakeElement(text="A"), FakeElement(text="B"))

        assert fake_session.texts_of(FIELD) == ["A", "B"]
        assert fake_session.texts_of(MISSING) == []

    @allure.story("Actions")
    @allure.title("Waiting for a missing element to disappear succeeds")
    def test_wait_for_invisible(self, fake_session):
        assert fake_session.wait_for_invisible(MISSING)


@allure.feature("Interaction Session")
class TestGestures:

    @allure.story("Scrolling")
    @allure.title("Scroll down swipes upward around the screen center")
    def test_scroll_down_coordinates(self, fake_driver, fake_session):
        fake_session.scroll_down()

        assert fake_driver.swipes == [(540, 1450, 540, 950, 500)]

    @allure.story("Scrolling")
    @allure.title("Scroll up swipes downward")
    def test_scroll_up_coordinates(self, fake_driver, fake_session):
        fake_session.scroll_up()

        start_y, end_y = fake_driver.swipes[0][1], fake_driver.swipes[0][3]
        assert start_y < end_y

    @allure.story("Scrolling")
    @allure.title("Scrolling stops once the element becomes visible")
    def test_scroll_to_element_found(self, fake_driver, fake_session):
        target = by_text("Sauce Labs Onesie")

        def reveal(swipe_count):
            if swipe_count == 2:
                fake_driver.add(target)

        fake_driver.on_swipe = reveal

        assert fake_session.scroll_to_element(target)
        assert len(fake_driver.swipes) == 2

    @allure.story("Scrolling")
    @allure.title("Scrolling gives up after the swipe limit")
    def test_scroll_to_element_not_found(self, fake_driver, fake_session):
        assert not fake_session.scroll_to_element(MISSING)
        assert len(fake_driver.swipes) == fake_session.max_swipes

    @allure.story("Evidence")
    @allure.title("Screenshot is returned as PNG bytes")
    def test_screenshot_png(self, fake_session):
        assert fake_session.screenshot_png().startswith(b"\x89PNG")
