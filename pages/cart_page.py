from typing import List

from core.locators import by_id

from .base import BasePage


class CartPage(BasePage):
    REMOVE_BUTTON = by_id("removeBt")
    CHECKOUT_BUTTON = by_id("cartBt")
    ITEM_TITLES = by_id("titleTV")

    REQUIRED_ELEMENTS = (CHECKOUT_BUTTON,)

    def is_page_loaded(self) -> bool:
        return self.session.is_visible(self.CHECKOUT_BUTTON)

    def click_remove_button(self) -> None:
        self.logger.info("Haciendo clic en el botón de eliminar producto")
        self.session.click(self.REMOVE_BUTTON)

    def click_checkout_button(self) -> None:
        self.logger.info("Haciendo clic en el botón de checkout")
        self.session.click(self.CHECKOUT_BUTTON)

    def is_remove_button_visible(self) -> bool:
        return self.session.is_visible(self.REMOVE_BUTTON)

    def is_checkout_button_enabled(self) -> bool:
        return self.session.is_enabled(self.CHECKOUT_BUTTON)

    def get_cart_items(self) -> List[str]:
        return self.session.texts_of(self.ITEM_TITLES)

    def remove_product_from_cart(self, product_name: str) -> None:
        """Remove one product by name.

        Each cart row has its own remove button, so the button at the same
        position as the product title is clicked. Falls back to the first
        remove button when the title is not listed.
        """
        self.logger.info(f"Removiendo producto del carrito: {product_name}")
        items = self.get_cart_items()
        buttons = self.session.find_all(self.REMOVE_BUTTON)
        if product_name in items and len(buttons) == len(items):
            buttons[items.index(product_name)].click()
            return
        self.click_remove_button()

    def is_product_in_cart(self, product_name: str) -> bool:
        return product_name in self.get_cart_items()

    def get_cart_items_count(self) -> int:
        return len(self.get_cart_items())
