"""
Order projection: ledger + catalog rows into seller-facing Order models.
"""
import math
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Tuple

from seller_finance.schemas.orders import Order
from seller_finance.services.blockers import awaiting_fulfillment, awaiting_qc, is_on_hold

FULFILMENT_HOLD = timedelta(days=7)
QC_HOLD = timedelta(days=14)


def to_major_units(smallest_unit) -> float:
    """Pence to pounds; missing amounts count as zero."""
    return (smallest_unit or 0) / 100


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Warehouse timestamps are UTC; SQLite hands them back naive."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def commission_split(final_base_smallest_unit, commission_percentage) -> Tuple[float, float, float]:
    """Return (original_final_base, original_commission, base_after_commission)."""
    final_base = to_major_units(final_base_smallest_unit)
    rate = (commission_percentage or 0) / 100
    return final_base, final_base * rate, final_base * (1 - rate)


def eligibility_moment(ff_time: Optional[datetime], qc_time: Optional[datetime]) -> Optional[datetime]:
    if ff_time is not None:
        return as_utc(ff_time) + FULFILMENT_HOLD
    if qc_time is not None:
        return as_utc(qc_time) + QC_HOLD
    return None


def days_until(moment: Optional[datetime], now: datetime) -> Optional[int]:
    """Whole days (rounded up) until moment; zero or less means already reached."""
    if moment is None:
        return None
    return math.ceil((moment - as_utc(now)) / timedelta(days=1))


def hold_reasons(
    status: str,
    payout_id,
    qc_status: Optional[str],
    ff_status: Optional[str],
    ff_time: Optional[datetime],
) -> List[str]:
    """Same rules as the QC_PENDING and FF_PENDING blockers, worded per order."""
    reasons = []
    if not is_on_hold(status, payout_id):
        return reasons
    if awaiting_qc(qc_status):
        reasons.append(f"QC status: {qc_status or 'unknown'}")
    if awaiting_fulfillment(ff_status, ff_time):
        reasons.append("Awaiting fulfillment")
    return reasons


class OrderProjector:
    def project(self, row: dict, now: datetime) -> Order:
        final_base, commission, base_after = commission_split(
            row.get("final_base_smallest_unit"), row.get("commission_percentage")
        )
        total_paid = to_major_units(row.get("total_payable_smallest_unit"))
        status = row["payout_status"]
        eligible_at = eligibility_moment(row.get("ff_time"), row.get("qc_time"))

        return Order(
            order_id=str(row["order_id"]),
            order_number=row.get("order_number"),
            internal_order_id=row.get("internal_order_id"),
            product_name=row.get("product_name"),
            vendor=row.get("vendor"),
            vendor_id=row.get("vendor_id"),
            customer_name=row.get("customer_name"),
            payout_status=status,
            created_at=row.get("created_at"),
            latest_status=row.get("latest_status"),
            original_final_base=final_base,
            commission_percentage=row.get("commission_percentage") or 0.0,
            original_commission=commission,
            base_after_commission=base_after,
            vendor_shipping_cost=to_major_units(row.get("shipping_amount_smallest_unit")),
            supplier_refund=to_major_units(row.get("refund_amount_smallest_unit")),
            cancellation_fee=to_major_units(row.get("cancellation_fee_smallest_unit")),
            total_paid_amount=total_paid,
            includes_shipping=bool(row.get("includes_shipping")),
            qc_status=row.get("qc_status"),
            ff_status=row.get("ff_status"),
            eligibility_date=eligible_at.date() if eligible_at else None,
            days_until_eligible=days_until(eligible_at, now),
            hold_reasons=hold_reasons(
                status,
                row.get("payout_id"),
                row.get("qc_status"),
                row.get("ff_status"),
                row.get("ff_time"),
            ),
            # legacy aliases
            status=status,
            amount=total_paid,
            completed_at=row.get("created_at"),
        )

    def project_all(self, rows: Iterable[dict], now: datetime) -> List[Order]:
        return [self.project(row, now) for row in rows]
