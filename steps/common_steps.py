"""Steps shared by every journey: app start, login screen and validation messages."""

import logging

from pytest_bdd import given, parsers, then

from core.reporting import record_report_data

logger = logging.getLogger(__name__)


@given("que el usuario abre la aplicación Sauce Demo")
def app_is_open(journey):
    # The app is launched by the session the scenario hook opened
    logger.info(f"=== {journey.label}: Abriendo la aplicación Sauce Demo ===")
    record_report_data(
        journey.title("Aplicación Abierta"),
        "La aplicación Sauce Demo ha sido abierta",
    )


@given("está en la pantalla de login")
def on_login_screen(journey, login_page):
    logger.info("Verificando que estamos en la pantalla de login")
    login_page.ensure_open()
    loaded = login_page.is_page_loaded()
    logger.info(f"Página de login cargada: {loaded}")
    record_report_data(
        journey.title("Página de Login"),
        f"Página de login cargada: {loaded}",
    )
    assert loaded, "La pantalla de login no se cargó"


@then("debería aparecer un mensaje de error")
def error_message_is_shown(journey):
    page = journey.error_page
    assert page is not None, "Ningún paso previo envió un formulario"
    displayed = page.is_error_message_displayed()
    text = page.get_error_message_text()
    logger.info(f"Mensaje de error visible: {displayed}, Texto: {text}")
    record_report_data(journey.title("Mensaje de Error"), f"Mensaje de error: {text}")
    assert displayed, "No apareció ningún mensaje de error"


@then(parsers.re(r'el mensaje debería contener "(?P<expected_text>[^"]*)"'))
def error_message_contains(journey, expected_text):
    page = journey.error_page
    assert page is not None, "Ningún paso previo envió un formulario"
    journey.expected_error_message = expected_text
    actual_text = page.get_error_message_text()
    contains = expected_text in actual_text
    logger.info(f"Mensaje contiene texto esperado: {contains}, Mensaje actual: {actual_text}")
    record_report_data(
        journey.title("Verificación de Mensaje de Error"),
        f"Texto esperado: {expected_text}, Mensaje actual: {actual_text}",
    )
    assert contains, f"Se esperaba '{expected_text}' en el mensaje de error, se obtuvo '{actual_text}'"
