import logging

from pytest_bdd import then, when

from core.reporting import record_report_data

logger = logging.getLogger(__name__)


@when("el usuario ingresa credenciales válidas")
def enter_valid_credentials(journey, login_page):
    logger.info("Ingresando credenciales válidas")
    login_page.perform_login(journey.data.valid_username, journey.data.valid_password)
    journey.error_page = login_page
    record_report_data(
        journey.title("Credenciales Válidas"),
        f"Se ingresaron credenciales válidas para el usuario {journey.data.valid_username}",
    )


@when("el usuario ingresa credenciales inválidas")
def enter_invalid_credentials(journey, login_page):
    logger.info("Ingresando credenciales inválidas")
    login_page.perform_login(journey.data.invalid_username, journey.data.invalid_password)
    journey.error_page = login_page
    record_report_data(
        journey.title("Credenciales Inválidas"),
        f"Se ingresaron credenciales inválidas para el usuario {journey.data.invalid_username}",
    )


@when("el usuario realiza login exitoso")
def successful_login(journey, login_page):
    logger.info("Realizando login exitoso")
    login_page.perform_login(journey.data.valid_username, journey.data.valid_password)
    journey.error_page = login_page
    record_report_data(
        journey.title("Login Exitoso"),
        "Se realizó login exitoso con credenciales válidas",
    )


@when("presiona el botón de login")
def press_login_button(journey, login_page):
    # perform_login already submits; a second tap is only needed if the form is still up
    if login_page.is_login_button_visible():
        login_page.click_login_button()
    record_report_data(journey.title("Botón de Login"), "Se presionó el botón de login")


@then("el usuario debería ser redirigido al inventario")
def redirected_to_inventory(journey, inventory_page):
    logger.info("Verificando redirección al inventario")
    inventory_page.wait_for_page_to_load()
    loaded = inventory_page.is_page_loaded()
    logger.info(f"Página del inventario cargada: {loaded}")
    record_report_data(
        journey.title("Redirección al Inventario"),
        f"Página del inventario cargada: {loaded}",
    )
    assert loaded, "El usuario no fue redirigido al inventario"


@then("debería ver la lista de productos disponibles")
def products_are_listed(journey, inventory_page):
    products = inventory_page.get_product_names()
    logger.info(f"Productos disponibles: {products}")
    record_report_data(
        journey.title("Lista de Productos"),
        f"Productos disponibles: {', '.join(products) or '-'}",
    )
    assert inventory_page.is_page_loaded(), "La lista de productos no está visible"
    assert products, "No hay productos disponibles"


@then("debería ver la página del inventario")
def inventory_is_shown(journey, inventory_page):
    inventory_page.wait_for_page_to_load()
    loaded = inventory_page.is_page_loaded()
    logger.info(f"Página del inventario cargada: {loaded}")
    record_report_data(
        journey.title("Verificación de Inventario"),
        f"Página del inventario cargada: {loaded}",
    )
    assert loaded, "La página del inventario no está visible"


@then("el usuario debería permanecer en la pantalla de login")
def still_on_login(journey, login_page):
    loaded = login_page.is_page_loaded()
    logger.info(f"Usuario permanece en login: {loaded}")
    record_report_data(
        journey.title("Permanencia en Login"),
        f"Página de login visible: {loaded}",
    )
    assert loaded, "El usuario salió de la pantalla de login"
