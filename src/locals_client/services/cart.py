"""In-memory shopping cart."""

from dataclasses import dataclass, field, replace

from locals_client.domain.cart import CartLine
from locals_client.domain.models import Product


@dataclass
class CartService:
    """Cart lines keyed by product and size. Not persisted."""

    lines: list[CartLine] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Total quantity across lines."""
        return sum(line.quantity for line in self.lines)

    @property
    def total(self) -> float:
        """Subtotal of all lines."""
        return round(sum(line.quantity * line.unit_price for line in self.lines), 2)

    def add_item(self, product: Product, qty: int = 1, size: str | None = None) -> None:
        """Add a product, merging with an existing line for the same size."""
        for index, line in enumerate(self.lines):
            if line.product_id == product.id and line.size == size:
                self.lines[index] = replace(line, quantity=line.quantity + qty)
                return
        self.lines.append(
            CartLine(
                product_id=product.id,
                product=product,
                quantity=qty,
                unit_price=product.price,
                size=size,
            )
        )

    def update_qty(self, product_id: str, qty: int, size: str | None = None) -> None:
        """Set the quantity; zero or less removes matching lines.

        Without a size every line of the product matches.
        """
        if qty <= 0:
            self.remove_item(product_id, size)
            return
        self.lines = [
            replace(line, quantity=qty) if _matches(line, product_id, size) else line
            for line in self.lines
        ]

    def remove_item(self, product_id: str, size: str | None = None) -> None:
        self.lines = [
            line for line in self.lines if not _matches(line, product_id, size)
        ]

    def get_qty(self, product_id: str) -> int:
        return sum(
            line.quantity for line in self.lines if line.product_id == product_id
        )

    def get_size_qty(self, product_id: str, size: str) -> int:
        for line in self.lines:
            if line.product_id == product_id and line.size == size:
                return line.quantity
        return 0

    def clear(self) -> None:
        self.lines = []


def _matches(line: CartLine, product_id: str, size: str | None) -> bool:
    if line.product_id != product_id:
        return False
    return size is None or line.size == size
