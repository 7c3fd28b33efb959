"""Domain models for the shopping cart."""

from dataclasses import dataclass

from locals_client.domain.models import Product


@dataclass(frozen=True)
class CartLine:
    """A product in the cart, optionally for a specific size."""

    product_id: str
    product: Product
    quantity: int
    unit_price: float
    size: str | None = None

    @property
    def line_total(self) -> float:
        return round(self.quantity * self.unit_price, 2)
