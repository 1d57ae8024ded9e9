from typing import Optional

from core.locators import by_id
from exceptions import ErrorMessageMismatchError, ErrorMessageMissingError, create_error_context

from .base import BasePage


class CheckoutPage(BasePage):
    # Shipping address
    FULL_NAME_FIELD = by_id("fullNameET")
    ADDRESS1_FIELD = by_id("address1ET")
    ADDRESS2_FIELD = by_id("address2ET")
    CITY_FIELD = by_id("cityET")
    ZIP_CODE_FIELD = by_id("zipET")
    COUNTRY_FIELD = by_id("countryET")
    # The same button reads To Payment, Review Order and Place Order as the flow advances
    TO_PAYMENT_BUTTON = by_id("paymentBtn")

    # Payment method
    CARD_HOLDER_NAME_FIELD = by_id("nameET")
    CARD_NUMBER_FIELD = by_id("cardNumberET")
    EXPIRATION_DATE_FIELD = by_id("expirationDateET")
    SECURITY_CODE_FIELD = by_id("securityCodeET")

    CHECKOUT_COMPLETE_TEXT = by_id("completeTV")
    CONTINUE_SHOPPING_BUTTON = by_id("shoopingBt")
    CHECKOUT_TITLE = by_id("enterShippingAddressTV")
    ERROR_MESSAGE = by_id("fullNameErrorTV")

    SHIPPING_FIELDS = (FULL_NAME_FIELD, ADDRESS1_FIELD, CITY_FIELD, ZIP_CODE_FIELD, COUNTRY_FIELD)
    REQUIRED_ELEMENTS = (FULL_NAME_FIELD, TO_PAYMENT_BUTTON)

    def is_page_loaded(self) -> bool:
        return self._all_visible(self.FULL_NAME_FIELD, self.TO_PAYMENT_BUTTON)

    def enter_full_name(self, full_name: str) -> None:
        self.logger.info(f"Ingresando nombre completo: {full_name}")
        self.session.type_text(self.FULL_NAME_FIELD, full_name)

    def enter_address1(self, address1: str) -> None:
        self.logger.info(f"Ingresando dirección 1: {address1}")
        self.session.type_text(self.ADDRESS1_FIELD, address1)

    def enter_address2(self, address2: str) -> None:
        self.logger.info(f"Ingresando dirección 2: {address2}")
        self.session.type_text(self.ADDRESS2_FIELD, address2)

    def enter_city(self, city: str) -> None:
        self.logger.info(f"Ingresando ciudad: {city}")
        self.session.type_text(self.CITY_FIELD, city)

    def enter_zip_code(self, zip_code: str) -> None:
        self.logger.info(f"Ingresando código postal: {zip_code}")
        self.session.type_text(self.ZIP_CODE_FIELD, zip_code)

    def enter_country(self, country: str) -> None:
        self.logger.info(f"Ingresando país: {country}")
        self.session.type_text(self.COUNTRY_FIELD, country)

    def fill_shipping_address(
        self,
        full_name: str,
        address1: str,
        city: str,
        zip_code: str,
        country: str,
        address2: Optional[str] = None,
    ) -> None:
        self.enter_full_name(full_name)
        self.enter_address1(address1)
        if address2:
            self.enter_address2(address2)
        self.enter_city(city)
        self.enter_zip_code(zip_code)
        self.enter_country(country)

    def enter_card_holder_name(self, card_holder_name: str) -> None:
        self.logger.info(f"Ingresando nombre del titular: {card_holder_name}")
        self.session.type_text(self.CARD_HOLDER_NAME_FIELD, card_holder_name)

    def enter_card_number(self, card_number: str) -> None:
        self.logger.info("Ingresando número de tarjeta")
        self.session.type_text(self.CARD_NUMBER_FIELD, card_number, sensitive=True)

    def enter_expiration_date(self, expiration_date: str) -> None:
        self.logger.info(f"Ingresando fecha de expiración: {expiration_date}")
        self.session.type_text(self.EXPIRATION_DATE_FIELD, expiration_date)

    def enter_security_code(self, security_code: str) -> None:
        self.logger.info("Ingresando código de seguridad")
        self.session.type_text(self.SECURITY_CODE_FIELD, security_code, sensitive=True)

    def fill_payment_method(
        self,
        card_holder_name: str,
        card_number: str,
        expiration_date: str,
        security_code: str,
    ) -> None:
        self.enter_card_holder_name(card_holder_name)
        self.enter_card_number(card_number)
        self.enter_expiration_date(expiration_date)
        self.enter_security_code(security_code)

    def click_to_payment_button(self) -> None:
        self.logger.info("Haciendo clic en el botón To Payment")
        self.session.click(self.TO_PAYMENT_BUTTON)

    def click_review_order_button(self) -> None:
        self.logger.info("Haciendo clic en el botón Review Order")
        self.session.click(self.TO_PAYMENT_BUTTON)

    def click_place_order_button(self) -> None:
        self.logger.info("Haciendo clic en el botón Place Order")
        self.session.click(self.TO_PAYMENT_BUTTON)

    def click_continue_button(self) -> None:
        self.logger.info("Haciendo clic en el botón continuar")
        self.session.click(self.TO_PAYMENT_BUTTON)

    def click_continue_shopping_button(self) -> None:
        self.logger.info("Haciendo clic en el botón Continue Shopping")
        self.session.click(self.CONTINUE_SHOPPING_BUTTON)

    def perform_checkout_without_data(self) -> None:
        self.logger.info("Realizando checkout sin ingresar datos")
        self.click_to_payment_button()

    def is_checkout_complete_visible(self) -> bool:
        return self.session.is_visible(self.CHECKOUT_COMPLETE_TEXT)

    def is_checkout_title_visible(self) -> bool:
        # The header sits above the first shipping field
        return self.session.is_currently_visible(self.FULL_NAME_FIELD)

    def get_checkout_title_text(self) -> str:
        if self.session.is_currently_visible(self.CHECKOUT_TITLE):
            return self.session.get_text(self.CHECKOUT_TITLE)
        return ""

    def are_fields_empty(self) -> bool:
        for locator in self.SHIPPING_FIELDS:
            lookup = self.session.find(locator)
            if lookup and (lookup.element.text or "").strip():
                return False
        return True

    def is_error_message_displayed(self) -> bool:
        return self.session.is_currently_visible(self.ERROR_MESSAGE)

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

    def validate_error_message_exists(self, expected_message: str) -> bool:
        """Fail the scenario unless the validation message is shown with the expected text.

        Raises ErrorMessageMissingError when no message is displayed and
        ErrorMessageMismatchError when it is displayed with other text.
        """
        exists = self.is_error_message_displayed()
        actual_text = self.get_error_message_text()
        self.logger.info(
            f"Validando mensaje de error. Esperado: '{expected_message}', "
            f"Actual: '{actual_text}', Existe: {exists}"
        )

        context = create_error_context(component="Checkout", operation="validate_error_message")
        if not exists:
            self.logger.error("El mensaje de error no apareció")
            raise ErrorMessageMissingError(expected_message, actual_text, error_context=context)

        if expected_message not in actual_text:
            self.logger.error("El mensaje de error no contiene el texto esperado")
            raise ErrorMessageMismatchError(expected_message, actual_text, error_context=context)

        return True
