import logging

from pytest_bdd import parsers, then, when

from core.reporting import record_report_data

logger = logging.getLogger(__name__)

CHECKOUT = "CHECKOUT"
CONTINUE = "CONTINUE"


@when(parsers.re(r'el usuario presiona el botón "(?P<button_text>[^"]+)"'))
def press_flow_button(journey, cart_page, checkout_page, button_text):
    logger.info(f"Presionando botón: {button_text}")
    if button_text == CHECKOUT:
        cart_page.click_checkout_button()
    elif button_text == CONTINUE:
        checkout_page.click_continue_button()
        journey.error_page = checkout_page
    else:
        raise ValueError(f"Botón desconocido en el flujo de compra: {button_text}")
    record_report_data(journey.title("Botón Presionado"), f"Se presionó el botón: {button_text}")


@then("debería ser redirigido a la página de información de checkout")
def redirected_to_checkout(journey, checkout_page):
    checkout_page.wait_for_page_to_load()
    loaded = checkout_page.is_page_loaded()
    logger.info(f"Página de checkout cargada: {loaded}")
    record_report_data(
        journey.title("Redirección al Checkout"),
        f"Página de información de checkout cargada: {loaded}",
    )
    assert loaded, "El usuario no fue redirigido a la información de checkout"


@then(parsers.re(r'debería ver el título "(?P<expected_title>[^"]+)"'))
def checkout_title_is_shown(journey, checkout_page, expected_title):
    visible = checkout_page.is_checkout_title_visible()
    actual_title = checkout_page.get_checkout_title_text()
    logger.info(f"Título visible: {visible}, Título actual: {actual_title}")
    record_report_data(
        journey.title("Verificación de Título de Checkout"),
        f"Título esperado: {expected_title}, Título actual: {actual_title or '-'}",
    )
    assert visible, f"La pantalla '{expected_title}' no está visible"


@when(parsers.re(r'el usuario presiona el botón "(?P<button_text>[^"]+)" sin ingresar información'))
def press_button_without_data(journey, checkout_page, button_text):
    logger.info(f"Presionando botón '{button_text}' sin ingresar información")
    if button_text != CONTINUE:
        raise ValueError(f"Botón desconocido en checkout: {button_text}")
    empty = checkout_page.are_fields_empty()
    logger.info(f"Campos vacíos antes de continuar: {empty}")
    checkout_page.click_continue_button()
    journey.error_page = checkout_page
    record_report_data(
        journey.title("Continuar Sin Información"),
        f"Se presionó el botón {button_text} sin ingresar información (campos vacíos: {empty})",
    )


@then("el caso debería fallir si el mensaje de error no existe")
def fail_unless_error_message(journey, checkout_page):
    expected = journey.expected_error_message or journey.data.checkout_required_message
    logger.info("Validando que el mensaje de error existe y fallando si no existe")
    result = checkout_page.validate_error_message_exists(expected)
    record_report_data(
        journey.title("Validación de Error"),
        f"Validación del mensaje de error: {result}",
    )
