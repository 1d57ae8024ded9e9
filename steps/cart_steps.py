import logging

from pytest_bdd import parsers, then, when

from core.reporting import record_report_data

logger = logging.getLogger(__name__)

ADD_TO_CART = "ADD TO CART"
REMOVE = "REMOVE"


@when(parsers.re(r'el usuario selecciona el producto "(?P<product_name>[^"]+)"'))
def select_product(journey, inventory_page, product_name):
    logger.info(f"Seleccionando producto: {product_name}")
    journey.selected_product = product_name
    journey.cart_count_before = inventory_page.get_cart_items_count()
    present = inventory_page.is_product_present(product_name)
    if not present:
        present = inventory_page.scroll_to_product(product_name)
    logger.info(f"Producto presente: {present}")
    record_report_data(
        journey.title("Producto Seleccionado"),
        f"Producto: {product_name}, Presente: {present}",
    )


@when(parsers.re(r'presiona el botón "(?P<button_text>[^"]+)"'))
def press_product_button(journey, inventory_page, button_text):
    logger.info(f"Presionando botón: {button_text} para {journey.product}")
    if journey.cart_count_before is None:
        journey.cart_count_before = inventory_page.get_cart_items_count()
    if button_text == ADD_TO_CART:
        inventory_page.add_product_to_cart(journey.product)
    elif button_text == REMOVE:
        inventory_page.remove_product_from_cart(journey.product)
    else:
        raise ValueError(f"Botón desconocido en el inventario: {button_text}")
    record_report_data(
        journey.title("Botón Presionado"),
        f"Se presionó el botón: {button_text}",
    )


@then(parsers.re(r'el botón debería cambiar a "(?P<button_text>[^"]+)"'))
def button_changed_to(journey, inventory_page, button_text):
    if button_text == REMOVE:
        changed = inventory_page.is_product_in_cart(journey.product)
    elif button_text == ADD_TO_CART:
        changed = inventory_page.can_add_product_to_cart(journey.product)
    else:
        raise ValueError(f"Botón desconocido en el inventario: {button_text}")
    logger.info(f"Botón cambió correctamente: {changed}")
    record_report_data(
        journey.title("Verificación de Cambio de Botón"),
        f"Botón esperado: {button_text}, Cambió: {changed}",
    )
    assert changed, f"El botón de '{journey.product}' no cambió a '{button_text}'"


@then(parsers.re(r"el contador del carrito debería incrementar en (?P<amount>\d+)"), converters={"amount": int})
def cart_counter_increased(journey, inventory_page, amount):
    current = inventory_page.get_cart_items_count()
    before = journey.cart_count_before or 0
    logger.info(f"Items en el carrito: {before} -> {current}")
    record_report_data(
        journey.title("Incremento del Carrito"),
        f"Items en carrito: {current}, Incremento esperado: {amount}",
    )
    assert current == before + amount, f"El carrito tiene {current} items, se esperaban {before + amount}"


@when("el usuario presiona el ícono del carrito")
def open_cart(journey, inventory_page):
    inventory_page.click_cart_icon()
    record_report_data(journey.title("Carrito Abierto"), "Se presionó el ícono del carrito")


@then("debería ser redirigido a la página del carrito")
def redirected_to_cart(journey, cart_page):
    cart_page.wait_for_page_to_load()
    loaded = cart_page.is_page_loaded()
    logger.info(f"Página del carrito cargada: {loaded}")
    record_report_data(
        journey.title("Redirección al Carrito"),
        f"Página del carrito cargada: {loaded}",
    )
    assert loaded, "El usuario no fue redirigido al carrito"


@then("debería ver los productos seleccionados en el carrito")
def selected_products_in_cart(journey, cart_page):
    items = cart_page.get_cart_items()
    logger.info(f"Productos en el carrito: {items}")
    record_report_data(
        journey.title("Productos en Carrito"),
        f"Productos en el carrito: {', '.join(items) or '-'}",
    )
    if journey.selected_product:
        assert journey.selected_product in items, (
            f"'{journey.selected_product}' no está en el carrito: {items}"
        )


@when(parsers.re(
    r'el usuario presiona el botón "(?P<button_text>[^"]+)" para el producto "(?P<product_name>[^"]+)"'
))
def press_button_for_cart_product(journey, cart_page, button_text, product_name):
    logger.info(f"Presionando botón '{button_text}' para el producto: {product_name}")
    journey.selected_product = product_name
    journey.cart_count_before = cart_page.get_cart_items_count()
    if button_text == REMOVE:
        cart_page.remove_product_from_cart(product_name)
    else:
        raise ValueError(f"Botón desconocido en el carrito: {button_text}")
    record_report_data(journey.title("Producto Removido"), f"Se removió el producto: {product_name}")


@then(parsers.re(r'el producto "(?P<product_name>[^"]+)" debería ser removido del carrito'))
def product_removed_from_cart(journey, cart_page, product_name):
    removed = not cart_page.is_product_in_cart(product_name)
    logger.info(f"Producto removido: {removed}")
    record_report_data(
        journey.title("Verificación de Remoción"),
        f"Producto removido: {product_name}, Removido: {removed}",
    )
    assert removed, f"'{product_name}' sigue en el carrito"


@then(parsers.re(r"el contador del carrito debería decrementar en (?P<amount>\d+)"), converters={"amount": int})
def cart_counter_decreased(journey, cart_page, amount):
    current = cart_page.get_cart_items_count()
    before = journey.cart_count_before or 0
    logger.info(f"Items en el carrito: {before} -> {current}")
    record_report_data(
        journey.title("Decremento del Carrito"),
        f"Items en carrito: {current}, Decremento esperado: {amount}",
    )
    assert current == max(before - amount, 0), (
        f"El carrito tiene {current} items, se esperaban {max(before - amount, 0)}"
    )
