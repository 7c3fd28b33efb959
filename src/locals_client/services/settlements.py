"""Merchant settlement report and payouts."""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal, Protocol

from locals_client.domain.models import PayoutSummary, SettlementReport
from locals_client.domain.responses import (
    PayoutSummaryResponse,
    SettlementReportResponse,
)
from locals_client.domain.results import Failure, Ok, message_or
from locals_client.services.notifications import Notifier

Period = Literal["week", "month", "all"]


class SettlementsApi(Protocol):
    """Interface for settlement endpoints."""

    async def report(
        self,
        period: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Ok[SettlementReportResponse] | Failure:
        """Fetch the settlement report."""

    async def payout_summary(self) -> Ok[PayoutSummaryResponse] | Failure:
        """Fetch the payout summary."""


@dataclass(frozen=True)
class SettlementOverview:
    """Report and payouts shown together on the settlement screen."""

    report: SettlementReport | None
    payouts: PayoutSummary | None


@dataclass
class SettlementService:
    """Loads settlement data for merchants."""

    api: SettlementsApi
    notifier: Notifier
    is_loading: bool = field(default=False, init=False)

    async def load(self, period: Period = "month") -> SettlementOverview:
        """Fetch the report and payout summary; each part may be missing."""
        self.is_loading = True
        try:
            report_result = await self.api.report(period)
            payout_result = await self.api.payout_summary()
        finally:
            self.is_loading = False

        report = None
        payouts = None
        if isinstance(report_result, Ok):
            report = report_result.value.report
        else:
            await self.notifier.alert(
                "Error", message_or(report_result, "Failed to load settlement data")
            )
        if isinstance(payout_result, Ok):
            payouts = payout_result.value.summary
        else:
            await self.notifier.alert(
                "Error", message_or(payout_result, "Failed to load payout summary")
            )
        return SettlementOverview(report=report, payouts=payouts)
