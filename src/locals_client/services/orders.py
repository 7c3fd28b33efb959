"""Customer orders: checkout from the cart, history and cancellation."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from locals_client.domain.cart import CartLine
from locals_client.domain.models import Order
from locals_client.domain.responses import OrderListResponse, OrderResponse
from locals_client.domain.results import Failure, Ok, message_or
from locals_client.services.cart import CartService
from locals_client.services.notifications import Notifier
from locals_client.services.session import SessionService

DELIVERY_FEE = 50.0
PAYMENT_METHOD = "COD"
USER_CANCELLATION_REASON = "Cancelled by user"

_logger = logging.getLogger(__name__)


class OrdersApi(Protocol):
    """Interface for customer order endpoints."""

    async def create(self, payload: dict[str, object]) -> Ok[OrderResponse] | Failure:
        """Place an order with one store."""

    async def list_orders(
        self, status: str | None = None, page: int = 1, limit: int = 10
    ) -> Ok[OrderListResponse] | Failure:
        """List the user's orders."""

    async def get(self, order_id: str) -> Ok[OrderResponse] | Failure:
        """Fetch one order."""

    async def update_status(
        self, order_id: str, status: str, cancellation_reason: str | None = None
    ) -> Ok[OrderResponse] | Failure:
        """Move an order to a new status."""


@dataclass(frozen=True)
class StoreOrder:
    """Cart lines that go to the same store as one order."""

    store_id: str
    store_name: str
    lines: tuple[CartLine, ...]

    @property
    def total(self) -> float:
        return round(sum(line.line_total for line in self.lines), 2)

    def payload(self, shipping_address: str) -> dict[str, object]:
        items: list[dict[str, object]] = []
        for line in self.lines:
            item: dict[str, object] = {
                "product": line.product_id,
                "quantity": line.quantity,
                "price": line.unit_price,
            }
            if line.size:
                item["size"] = line.size
            items.append(item)
        return {
            "store": self.store_id,
            "orderItems": items,
            "totalAmount": self.total,
            "shippingAddress": shipping_address,
            "paymentMethod": PAYMENT_METHOD,
        }


def split_by_store(lines: list[CartLine]) -> list[StoreOrder]:
    """Group cart lines by store, keeping the order stores first appear in."""
    grouped: dict[str, list[CartLine]] = {}
    names: dict[str, str] = {}
    for line in lines:
        store_id, store_name = _store_of(line)
        grouped.setdefault(store_id, []).append(line)
        names.setdefault(store_id, store_name)
    return [
        StoreOrder(store_id=store_id, store_name=names[store_id], lines=tuple(group))
        for store_id, group in grouped.items()
    ]


def grand_total(cart: CartService) -> float:
    """Cart subtotal plus the flat delivery fee for a non-empty cart."""
    if not cart.lines:
        return 0.0
    return round(cart.total + DELIVERY_FEE, 2)


def _store_of(line: CartLine) -> tuple[str, str]:
    store = line.product.store_id
    if isinstance(store, dict):
        return str(store.get("_id", "")), str(store.get("storeName") or "Store")
    return str(store or ""), "Store"


@dataclass
class OrderService:
    """Places and tracks the logged-in user's orders."""

    api: OrdersApi
    cart: CartService
    session: SessionService
    notifier: Notifier
    orders: list[Order] = field(default_factory=list, init=False)
    is_loading: bool = field(default=False, init=False)

    async def place_order(self, shipping_address: str) -> list[Order]:
        """Send one order per store in the cart.

        Lines of stores whose order went through leave the cart; the rest stay
        so a retry does not duplicate the placed orders.
        """
        if not self.session.is_authenticated:
            await self.notifier.alert("Error", "Please login to place an order")
            return []
        if not self.cart.lines:
            await self.notifier.alert("Error", "Your cart is empty")
            return []
        address = shipping_address.strip()
        if not address:
            await self.notifier.alert("Error", "Please enter your shipping address")
            return []
        if self.is_loading:
            return []

        store_orders = split_by_store(self.cart.lines)
        self.is_loading = True
        try:
            results = await asyncio.gather(
                *(self.api.create(order.payload(address)) for order in store_orders)
            )
        finally:
            self.is_loading = False

        placed: list[Order] = []
        failed = False
        for store_order, result in zip(store_orders, results, strict=True):
            if isinstance(result, Ok):
                placed.append(result.value.order)
                for line in store_order.lines:
                    self.cart.remove_item(line.product_id, line.size)
            else:
                failed = True
                _logger.warning(
                    "Order for store %s failed: %s",
                    store_order.store_id,
                    result.message,
                )
        if failed:
            await self.notifier.alert(
                "Error", "Failed to place order. Please try again."
            )
        else:
            await self.notifier.alert(
                "Order Placed Successfully!",
                "Your order has been placed and will be processed soon.",
            )
        return placed

    async def list_orders(self, status: str | None = None) -> list[Order]:
        """Load the order history, optionally filtered by status."""
        self.is_loading = True
        try:
            result = await self.api.list_orders(status)
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            self.orders = result.value.orders
            return self.orders
        await self.notifier.alert("Error", "Failed to load orders")
        return self.orders

    async def get_order(self, order_id: str) -> Order | None:
        result = await self.api.get(order_id)
        if isinstance(result, Ok):
            return result.value.order
        await self.notifier.alert(
            "Error", message_or(result, "Failed to load order details")
        )
        return None

    async def cancel_order(self, order: Order) -> Order | None:
        """Cancel after confirmation; only early statuses can be cancelled."""
        if not order.can_cancel:
            return None
        confirmed = await self.notifier.confirm(
            "Cancel Order", "Are you sure you want to cancel this order?"
        )
        if not confirmed or self.is_loading:
            return None
        self.is_loading = True
        try:
            result = await self.api.update_status(
                order.id, "Cancelled", USER_CANCELLATION_REASON
            )
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            updated = result.value.order
            self.orders = [updated if o.id == updated.id else o for o in self.orders]
            await self.notifier.alert("Success", "Order cancelled successfully")
            return updated
        await self.notifier.alert("Error", message_or(result, "Failed to cancel order"))
        return None
