from typing import List

from core.locators import by_id, by_text, by_xpath

from .base import BasePage


class InventoryPage(BasePage):
    PRODUCT_IMAGE = by_id("productIV")
    ADD_TO_CART_BUTTON = by_id("cartBt")
    CART_ICON = by_id("cartIV")
    CART_BADGE = by_id("cartTV")
    PRODUCT_TITLES = by_id("titleTV")

    # Templated by product name
    PRODUCT_ADD_BUTTON = by_xpath(
        "//android.widget.TextView[@text='{name}']"
        "/following-sibling::android.widget.TextView[@text='ADD TO CART']"
    )
    PRODUCT_REMOVE_BUTTON = by_xpath(
        "//android.widget.TextView[@text='{name}']"
        "/following-sibling::android.widget.TextView[@text='REMOVE']"
    )

    REQUIRED_ELEMENTS = (PRODUCT_IMAGE, CART_ICON)

    def is_page_loaded(self) -> bool:
        return self._all_visible(self.PRODUCT_IMAGE, self.CART_ICON)

    def click_product_image(self) -> None:
        self.logger.info("Haciendo clic en la imagen del producto")
        self.session.click(self.PRODUCT_IMAGE)

    def click_add_to_cart_button(self) -> None:
        self.logger.info("Haciendo clic en el botón de agregar al carrito")
        self.session.click(self.ADD_TO_CART_BUTTON)

    def click_cart_icon(self) -> None:
        self.logger.info("Haciendo clic en el icono del carrito")
        self.session.click(self.CART_ICON)

    def get_product_names(self) -> List[str]:
        return self.session.texts_of(self.PRODUCT_TITLES)

    def is_product_present(self, product_name: str) -> bool:
        present = product_name in self.get_product_names()
        self.logger.debug(f"Buscando producto '{product_name}'. Presente: {present}")
        return present

    def add_product_to_cart(self, product_name: str) -> None:
        self.logger.info(f"Agregando producto al carrito: {product_name}")
        self.session.click(self.PRODUCT_ADD_BUTTON.format(name=product_name))

    def remove_product_from_cart(self, product_name: str) -> None:
        self.logger.info(f"Removiendo producto del carrito: {product_name}")
        self.session.click(self.PRODUCT_REMOVE_BUTTON.format(name=product_name))

    def is_product_in_cart(self, product_name: str) -> bool:
        return self.session.is_visible(self.PRODUCT_REMOVE_BUTTON.format(name=product_name))

    def can_add_product_to_cart(self, product_name: str) -> bool:
        return self.session.is_visible(self.PRODUCT_ADD_BUTTON.format(name=product_name))

    def get_total_products_count(self) -> int:
        return len(self.get_product_names())

    def get_cart_items_count(self) -> int:
        # The badge is hidden while the cart is empty
        if not self.session.is_currently_visible(self.CART_BADGE):
            return 0
        badge_text = self.session.get_text(self.CART_BADGE)
        try:
            return int(badge_text.strip())
        except ValueError:
            self.logger.warning(f"No se pudo parsear el número de items del carrito: {badge_text}")
            return 0

    def scroll_to_product(self, product_name: str) -> bool:
        return self.session.scroll_to_element(by_text(product_name))

    def scroll_down_in_products(self) -> None:
        self.session.scroll_down()

    def scroll_up_in_products(self) -> None:
        self.session.scroll_up()

    def are_products_available(self) -> bool:
        return self.get_total_products_count() > 0
