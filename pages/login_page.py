from core.locators import by_id, by_xpath

from .base import BasePage


class LoginPage(BasePage):
    USERNAME_FIELD = by_id("nameET")
    PASSWORD_FIELD = by_id("passwordET")
    LOGIN_BUTTON = by_id("loginBtn")
    ERROR_MESSAGE = by_id("errorTV")
    MENU_BUTTON = by_id("menuIV")
    MENU_ITEM = by_id("itemTV")
    MENU_LOGIN_ITEM = by_xpath(
        "//android.widget.TextView[@resource-id='com.saucelabs.mydemoapp.android:id/itemTV' and @text='Log In']"
    )

    REQUIRED_ELEMENTS = (USERNAME_FIELD, PASSWORD_FIELD, LOGIN_BUTTON)

    def is_page_loaded(self) -> bool:
        return self._all_visible(self.USERNAME_FIELD, self.PASSWORD_FIELD, self.LOGIN_BUTTON)

    def open_login_from_menu(self) -> None:
        # The app starts on the catalog; login lives behind the side menu
        self.logger.info("Abriendo el login desde el menú lateral")
        self.session.click(self.MENU_BUTTON)
        self.session.click(self.MENU_LOGIN_ITEM)

    def ensure_open(self) -> None:
        if not self.session.is_currently_visible(self.USERNAME_FIELD):
            self.open_login_from_menu()
        self.wait_for_page_to_load()

    def enter_username(self, username: str) -> None:
        self.logger.info(f"Ingresando nombre de usuario: {username}")
        self.session.type_text(self.USERNAME_FIELD, username)

    def enter_password(self, password: str) -> None:
        self.logger.info("Ingresando contraseña")
        self.session.type_text(self.PASSWORD_FIELD, password, sensitive=True)

    def click_login_button(self) -> None:
        self.logger.info("Haciendo clic en el botón de login")
        self.session.click(self.LOGIN_BUTTON)

    def perform_login(self, username: str, password: str) -> None:
        self.logger.info(f"Realizando login con usuario: {username}")
        self.enter_username(username)
        self.enter_password(password)
        self.click_login_button()

    def clear_username_field(self) -> None:
        self.session.clear(self.USERNAME_FIELD)

    def clear_password_field(self) -> None:
        self.session.clear(self.PASSWORD_FIELD)

    def is_error_message_displayed(self) -> bool:
        return self.session.is_visible(self.ERROR_MESSAGE)

    def get_error_message_text(self) -> str:
        if self.is_error_message_displayed():
            return self.session.get_text(self.ERROR_MESSAGE)
        return ""

    def is_error_message_contains(self, expected_text: str) -> bool:
        actual_text = self.get_error_message_text()
        contains = expected_text in actual_text
        self.logger.debug(
            f"Verificando mensaje de error. Esperado: '{expected_text}', "
            f"Actual: '{actual_text}', Contiene: {contains}"
        )
        return contains

    def is_username_field_enabled(self) -> bool:
        return self.session.is_enabled(self.USERNAME_FIELD)

    def is_password_field_enabled(self) -> bool:
        return self.session.is_enabled(self.PASSWORD_FIELD)

    def is_login_button_enabled(self) -> bool:
        return self.session.is_enabled(self.LOGIN_BUTTON)

    def is_login_button_visible(self) -> bool:
        return self.session.is_currently_visible(self.LOGIN_BUTTON)

    def get_username_field_text(self) -> str:
        return self.session.get_text(self.USERNAME_FIELD)

    def get_password_field_text(self) -> str:
        return self.session.get_text(self.PASSWORD_FIELD)

    def are_fields_empty(self) -> bool:
        return self.get_username_field_text() == "" and self.get_password_field_text() == ""
