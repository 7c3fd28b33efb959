"""Incoming orders for the merchant's store."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

from locals_client.domain.models import Order
from locals_client.domain.responses import OrderListResponse, OrderResponse
from locals_client.domain.results import Failure, Ok, message_or
from locals_client.services.notifications import Notifier

REJECT_REASON = "Item unavailable"


class MerchantOrdersApi(Protocol):
    """Interface for merchant order endpoints."""

    async def list_orders(
        self, status: str | None = None, page: int = 1, limit: int = 10
    ) -> Ok[OrderListResponse] | Failure:
        """List orders placed with the merchant's store."""

    async def accept(self, order_id: str) -> Ok[OrderResponse] | Failure:
        """Accept a pending order."""

    async def reject(self, order_id: str, reason: str) -> Ok[OrderResponse] | Failure:
        """Reject a pending order."""

    async def mark_ready(self, order_id: str) -> Ok[OrderResponse] | Failure:
        """Mark an accepted order ready for pickup."""


@dataclass
class MerchantOrderService:
    """Order queue shown on the merchant dashboard."""

    api: MerchantOrdersApi
    notifier: Notifier
    orders: list[Order] = field(default_factory=list, init=False)
    status_filter: str | None = field(default=None, init=False)
    processing_order_id: str | None = field(default=None, init=False)
    is_loading: bool = field(default=False, init=False)

    @property
    def pending_count(self) -> int:
        return sum(1 for order in self.orders if order.status == "Pending")

    @property
    def accepted_count(self) -> int:
        return sum(
            1 for order in self.orders if order.status in ("Accepted", "Processing")
        )

    @property
    def ready_count(self) -> int:
        return sum(1 for order in self.orders if order.status == "ReadyForPickup")

    async def load(self, status: str | None = None) -> list[Order]:
        """Reload the queue; the filter is kept for later refreshes."""
        self.status_filter = status
        self.is_loading = True
        try:
            result = await self.api.list_orders(status)
        finally:
            self.is_loading = False
        if isinstance(result, Ok):
            self.orders = result.value.orders
        else:
            await self.notifier.alert(
                "Error", message_or(result, "Failed to load orders")
            )
        return self.orders

    async def accept(self, order_id: str) -> bool:
        return await self._update(
            order_id,
            lambda: self.api.accept(order_id),
            "Order accepted successfully",
            "Failed to accept order",
        )

    async def reject(self, order_id: str, reason: str = REJECT_REASON) -> bool:
        """Reject after confirmation."""
        confirmed = await self.notifier.confirm(
            "Reject Order", "Are you sure you want to reject this order?"
        )
        if not confirmed:
            return False
        return await self._update(
            order_id,
            lambda: self.api.reject(order_id, reason),
            "Order rejected",
            "Failed to reject order",
        )

    async def mark_ready(self, order_id: str) -> bool:
        return await self._update(
            order_id,
            lambda: self.api.mark_ready(order_id),
            "Order marked as ready for pickup",
            "Failed to mark order as ready",
        )

    async def _update(
        self,
        order_id: str,
        send: Callable[[], Awaitable[Ok[OrderResponse] | Failure]],
        success: str,
        fallback: str,
    ) -> bool:
        if self.processing_order_id is not None:
            return False
        self.processing_order_id = order_id
        try:
            result = await send()
        finally:
            self.processing_order_id = None
        if isinstance(result, Failure):
            await self.notifier.alert("Error", message_or(result, fallback))
            return False
        await self.notifier.alert("Success", success)
        await self.load(self.status_filter)
        return True
