"""
Active blockers: why part of a seller's money is not in the next payout.

Derived on every request from the current order statuses and never stored.
"""
from collections import Counter
from datetime import datetime
from typing import Iterable, List, Optional

from seller_finance.schemas.payout import ActiveBlocker
from seller_finance.services.queries import HOLD_STATUSES

QC_PENDING = "QC_PENDING"
FF_PENDING = "FF_PENDING"

BLOCKER_TEMPLATES = {
    QC_PENDING: {
        "severity": "medium",
        "title": "Quality Check Pending",
        "estimated_resolution": "2-3 business days",
    },
    FF_PENDING: {
        "severity": "low",
        "title": "Fulfillment Pending",
        "estimated_resolution": "5-7 business days",
    },
}


def is_on_hold(status: Optional[str], payout_id) -> bool:
    """Held or pending rows that no payout has claimed yet."""
    return status in HOLD_STATUSES and payout_id is None


def awaiting_qc(qc_status: Optional[str]) -> bool:
    return qc_status != "approved"


def awaiting_fulfillment(ff_status: Optional[str], ff_time: Optional[datetime]) -> bool:
    return ff_status != "completed" or ff_time is None


def reasons_for(row: dict) -> List[str]:
    """Reason codes raised by a single order row."""
    if not is_on_hold(row.get("status"), row.get("payout_id")):
        return []

    codes = []
    if awaiting_qc(row.get("qc_status")):
        codes.append(QC_PENDING)
    if awaiting_fulfillment(row.get("ff_status"), row.get("ff_time")):
        codes.append(FF_PENDING)
    return codes


def _describe(code: str, order_id: str, count: int) -> str:
    waiting_for = "quality approval" if code == QC_PENDING else "fulfillment confirmation"
    if count == 1:
        return f"Order {order_id} is awaiting {waiting_for}"
    return f"Order {order_id} and {count - 1} other(s) are awaiting {waiting_for}"


def active_blockers(rows: Iterable[dict]) -> List[ActiveBlocker]:
    """One blocker per reason code, in the order the codes first appear.

    Rows are expected newest first, so each blocker names the most recent
    order that raised it.
    """
    first_order = {}
    counts = Counter()

    for row in rows:
        for code in reasons_for(row):
            first_order.setdefault(code, str(row["order_id"]))
            counts[code] += 1

    return [
        ActiveBlocker(
            reason_code=code,
            description=_describe(code, order_id, counts[code]),
            action_required=False,
            order_count=counts[code],
            **BLOCKER_TEMPLATES[code],
        )
        for code, order_id in first_order.items()
    ]
