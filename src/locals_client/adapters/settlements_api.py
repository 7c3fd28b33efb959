"""Merchant settlement endpoints."""

from dataclasses import dataclass
from datetime import date

from locals_client.adapters.api_client import HttpxApiClient
from locals_client.domain.responses import (
    PayoutSummaryResponse,
    SettlementReportResponse,
)
from locals_client.domain.results import Failure, Ok
from locals_client.services.settlements import SettlementsApi

_BASE = "/api/v1/settlement"


@dataclass
class RestSettlementsApi(SettlementsApi):
    """Settlements API over the marketplace REST client."""

    api: HttpxApiClient

    async def report(
        self,
        period: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Ok[SettlementReportResponse] | Failure:
        """Fetch the settlement report for a period."""
        params: dict[str, object] = {
            "period": period,
            "startDate": start_date.isoformat() if start_date else None,
            "endDate": end_date.isoformat() if end_date else None,
        }
        return await self.api.call(
            "GET", f"{_BASE}/report", SettlementReportResponse, params=params
        )

    async def payout_summary(self) -> Ok[PayoutSummaryResponse] | Failure:
        """Fetch completed and pending payouts."""
        return await self.api.call(
            "GET", f"{_BASE}/payout-summary", PayoutSummaryResponse
        )
