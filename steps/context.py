from dataclasses import dataclass
from typing import Optional, Union

from core.config import JourneyData
from pages import CheckoutPage, LoginPage

ErrorMessagePage = Union[LoginPage, CheckoutPage]


@dataclass
class JourneyContext:
    # Per-scenario state handed from one step to the next
    data: JourneyData
    label: str = "Escenario"
    selected_product: Optional[str] = None
    cart_count_before: Optional[int] = None
    # Screen whose validation message the outcome steps read
    error_page: Optional[ErrorMessagePage] = None
    expected_error_message: Optional[str] = None

    @property
    def product(self) -> str:
        return self.selected_product or self.data.default_product

    def title(self, text: str) -> str:
        return f"{self.label} - {text}"
