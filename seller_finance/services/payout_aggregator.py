"""
Payout Aggregator - upcoming payout summary and payout history for a seller.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence

from seller_finance.schemas.payout import (
    ActiveBlocker,
    PayoutHistoryItem,
    PayoutOverview,
    TrustScore,
)
from seller_finance.services import queries
from seller_finance.services.ledger_reader import LedgerReader
from seller_finance.services.order_projector import to_major_units
from seller_finance.services.payout_schedule import days_until, estimate_payout_date

logger = logging.getLogger(__name__)

LOW_CONFIDENCE_SEVERITIES = {"error", "high"}
MEDIUM_CONFIDENCE_SEVERITIES = {"warning", "medium"}


@dataclass
class UpcomingTotals:
    eligible_order_count: int = 0
    eligible_amount: float = 0.0
    pending_amount: float = 0.0
    pending_order_count: int = 0
    held_order_count: int = 0
    earliest_pending_date: Optional[datetime] = None
    latest_order_date: Optional[datetime] = None
    payout_id: Optional[int] = None
    payout_created_at: Optional[datetime] = None

    @property
    def total_amount(self) -> float:
        return self.eligible_amount + self.pending_amount

    @property
    def current_cycle(self) -> str:
        return f"PAYOUT-{self.payout_id}" if self.payout_id is not None else "CURRENT"

    @classmethod
    def from_rows(cls, totals: Optional[dict], cycle: Optional[dict]) -> "UpcomingTotals":
        totals = totals or {}
        cycle = cycle or {}
        return cls(
            eligible_order_count=totals.get("eligible_order_count") or 0,
            eligible_amount=to_major_units(totals.get("eligible_amount_smallest_unit")),
            pending_amount=to_major_units(totals.get("pending_amount_smallest_unit")),
            pending_order_count=totals.get("pending_order_count") or 0,
            held_order_count=totals.get("held_order_count") or 0,
            earliest_pending_date=totals.get("earliest_pending_date"),
            latest_order_date=totals.get("latest_order_date"),
            payout_id=cycle.get("payout_id"),
            payout_created_at=cycle.get("payout_created_at"),
        )


def normalise_payout_status(status: Optional[str]) -> str:
    if status == "completed":
        return "completed"
    if status == "pending":
        return "pending"
    return "failed"


def history_item(row: dict) -> PayoutHistoryItem:
    payout_date = row.get("payout_date")
    return PayoutHistoryItem(
        payout_id=row["payout_id"],
        payout_date=payout_date.date() if isinstance(payout_date, datetime) else payout_date,
        amount=to_major_units(row.get("amount_smallest_unit")),
        status=normalise_payout_status(row.get("status")),
        order_count=row.get("order_count") or 0,
    )


def confidence_level(blockers: Sequence[ActiveBlocker], held_orders: int) -> str:
    severities = {blocker.severity for blocker in blockers}
    if severities & LOW_CONFIDENCE_SEVERITIES:
        return "low"
    if severities & MEDIUM_CONFIDENCE_SEVERITIES or held_orders > 0:
        return "medium"
    return "high"


class PayoutAggregator:
    def __init__(self, reader: LedgerReader, payout_weekday: int = 0, processing_days: int = 0):
        self.reader = reader
        self.payout_weekday = payout_weekday
        self.processing_days = processing_days

    def upcoming_totals(self, vendor_id: str) -> UpcomingTotals:
        totals = self.reader.fetch_one(queries.upcoming_payout_totals(vendor_id))
        cycle = self.reader.fetch_one(queries.current_cycle_payout(vendor_id))
        return UpcomingTotals.from_rows(totals, cycle)

    def payout_history(self, vendor_id: str, limit: int) -> List[PayoutHistoryItem]:
        rows = self.reader.fetch_all(queries.payout_history(vendor_id, limit))
        return [history_item(row) for row in rows]

    def overview(
        self,
        vendor_id: str,
        totals: UpcomingTotals,
        history: List[PayoutHistoryItem],
        blockers: List[ActiveBlocker],
        trust_score: TrustScore,
        today: date,
    ) -> PayoutOverview:
        payout_date = estimate_payout_date(today, self.payout_weekday, self.processing_days)
        confidence = confidence_level(blockers, totals.held_order_count)

        logger.info(
            f"Seller {vendor_id}: {totals.eligible_order_count} eligible orders, "
            f"£{totals.total_amount:.2f} upcoming on {payout_date} ({confidence} confidence)"
        )

        return PayoutOverview(
            seller_id=vendor_id,
            current_cycle=totals.current_cycle,
            estimated_payout_date=payout_date,
            confidence=confidence,
            total_amount=totals.total_amount,
            eligible_amount=totals.eligible_amount,
            pending_amount=totals.pending_amount,
            days_until_payout=days_until(payout_date, today),
            eligible_orders=totals.eligible_order_count,
            pending_orders=totals.pending_order_count,
            held_orders=totals.held_order_count,
            payout_history=history,
            trust_score=trust_score,
            active_blockers=blockers,
        )
