"""Merchant order endpoints."""

from dataclasses import dataclass

from locals_client.adapters.api_client import HttpxApiClient
from locals_client.domain.responses import OrderListResponse, OrderResponse
from locals_client.domain.results import Failure, Ok
from locals_client.services.merchant_orders import MerchantOrdersApi

_BASE = "/api/v1/merchant-order"


@dataclass
class RestMerchantOrdersApi(MerchantOrdersApi):
    """Merchant orders API over the marketplace REST client."""

    api: HttpxApiClient

    async def list_orders(
        self, status: str | None = None, page: int = 1, limit: int = 10
    ) -> Ok[OrderListResponse] | Failure:
        """List orders placed with the merchant's store."""
        params: dict[str, object] = {"status": status, "page": page, "limit": limit}
        return await self.api.call("GET", _BASE, OrderListResponse, params=params)

    async def accept(self, order_id: str) -> Ok[OrderResponse] | Failure:
        return await self.api.call("POST", f"{_BASE}/{order_id}/accept", OrderResponse)

    async def reject(self, order_id: str, reason: str) -> Ok[OrderResponse] | Failure:
        return await self.api.call(
            "POST", f"{_BASE}/{order_id}/reject", OrderResponse, json={"reason": reason}
        )

    async def mark_ready(self, order_id: str) -> Ok[OrderResponse] | Failure:
        return await self.api.call("POST", f"{_BASE}/{order_id}/ready", OrderResponse)
