"""Customer order endpoints."""

from dataclasses import dataclass

from locals_client.adapters.api_client import HttpxApiClient
from locals_client.domain.responses import OrderListResponse, OrderResponse
from locals_client.domain.results import Failure, Ok
from locals_client.services.orders import OrdersApi

_BASE = "/api/v1/order"


@dataclass
class RestOrdersApi(OrdersApi):
    """Orders API over the marketplace REST client."""

    api: HttpxApiClient

    async def create(self, payload: dict[str, object]) -> Ok[OrderResponse] | Failure:
        """Place an order with one store."""
        return await self.api.call("POST", _BASE, OrderResponse, json=payload)

    async def list_orders(
        self, status: str | None = None, page: int = 1, limit: int = 10
    ) -> Ok[OrderListResponse] | Failure:
        """List the user's orders, newest first."""
        params: dict[str, object] = {"status": status, "page": page, "limit": limit}
        return await self.api.call("GET", _BASE, OrderListResponse, params=params)

    async def get(self, order_id: str) -> Ok[OrderResponse] | Failure:
        return await self.api.call("GET", f"{_BASE}/{order_id}", OrderResponse)

    async def update_status(
        self, order_id: str, status: str, cancellation_reason: str | None = None
    ) -> Ok[OrderResponse] | Failure:
        """Move an order to a new status."""
        body: dict[str, object] = {"status": status}
        if cancellation_reason:
            body["cancellationReason"] = cancellation_reason
        return await self.api.call(
            "PUT", f"{_BASE}/{order_id}/status", OrderResponse, json=body
        )
