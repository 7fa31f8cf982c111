"""
Query templates for the seller finance API.

One builder per logical read. Each returns a SQLAlchemy Select whose filter
values are bound parameters, so the same statement runs on BigQuery in
production and on SQLite in tests and sample mode.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import String, and_, case, cast, distinct, false, func, or_, select

from seller_finance.core.exceptions import ValidationError
from seller_finance.models.ledger import BalanceTransaction, Payout, Vendor, VendorPayout

BT = BalanceTransaction
VP = VendorPayout

ORDER_STATUSES = ("in_progress", "completed", "eligible", "pending_eligibility", "held", "paid")
ELIGIBLE_STATUSES = ("eligible", "in_progress")
HOLD_STATUSES = ("held", "pending_eligibility")
UNLINKED_UPCOMING_STATUSES = ("eligible", "pending_eligibility", "held")


@dataclass(frozen=True)
class OrderFilters:
    status: Optional[str] = None
    search: Optional[str] = None
    limit: int = 100
    offset: int = 0

    @classmethod
    def build(
        cls,
        status: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
        max_limit: int = 500,
    ) -> "OrderFilters":
        """Validate raw request values into a filter set."""
        if status in (None, "", "all"):
            status = None
        elif status not in ORDER_STATUSES:
            raise ValidationError(
                f"Unknown status '{status}'. Expected one of: all, {', '.join(ORDER_STATUSES)}"
            )

        search = search.strip() if search else None

        if limit < 1 or limit > max_limit:
            raise ValidationError(f"limit must be between 1 and {max_limit}")
        if offset < 0:
            raise ValidationError("offset must not be negative")

        return cls(status=status, search=search or None, limit=limit, offset=offset)


def _live(model):
    return model.deleted == false()


def _catalog_join():
    return BT.order_line_id == cast(VP.order_line_id, String)


def vendor_by_handle(handle: str):
    # Two rows are enough to notice a duplicated handle.
    return (
        select(Vendor.id.label("id"))
        .where(Vendor.handle == handle, _live(Vendor))
        .order_by(Vendor.id)
        .limit(2)
    )


def _order_columns():
    return (
        BT.order_line_id.label("order_id"),
        VP.order_number.label("order_number"),
        VP.internal_order_id.label("internal_order_id"),
        VP.title.label("product_name"),
        VP.vendor.label("vendor"),
        VP.vendor_id.label("vendor_id"),
        VP.customer_name.label("customer_name"),
        VP.latest_status.label("latest_status"),
        VP.includes_shipping.label("includes_shipping"),
        BT.created_at.label("created_at"),
        BT.status.label("payout_status"),
        BT.payout_id.label("payout_id"),
        BT.final_base_smallest_unit.label("final_base_smallest_unit"),
        BT.commission_percentage.label("commission_percentage"),
        BT.shipping_amount_smallest_unit.label("shipping_amount_smallest_unit"),
        BT.refund_amount_smallest_unit.label("refund_amount_smallest_unit"),
        BT.cancellation_fee_smallest_unit.label("cancellation_fee_smallest_unit"),
        BT.total_payable_smallest_unit.label("total_payable_smallest_unit"),
        VP.qc_status.label("qc_status"),
        VP.qc_time.label("qc_time"),
        VP.ff_status.label("ff_status"),
        VP.ff_time.label("ff_time"),
    )


def _vendor_orders(vendor_id: str):
    return (
        select(*_order_columns())
        .select_from(BT)
        .outerjoin(VP, _catalog_join())
        .where(
            BT.destination_id == vendor_id,
            _live(BT),
            BT.status.in_(ORDER_STATUSES),
        )
    )


def orders_for_vendor(vendor_id: str, filters: OrderFilters):
    stmt = _vendor_orders(vendor_id)

    if filters.status:
        stmt = stmt.where(BT.status == filters.status)

    if filters.search:
        # INSTR keeps % and _ literal on both BigQuery and SQLite
        term = filters.search.lower()
        stmt = stmt.where(
            or_(
                func.instr(func.lower(cast(VP.order_number, String)), term) > 0,
                func.instr(func.lower(VP.internal_order_id), term) > 0,
                func.instr(func.lower(VP.title), term) > 0,
            )
        )

    return (
        stmt.order_by(BT.created_at.desc(), BT.order_line_id)
        .limit(filters.limit)
        .offset(filters.offset)
    )


def order_for_vendor(vendor_id: str, order_id: str):
    return _vendor_orders(vendor_id).where(BT.order_line_id == order_id).limit(1)


def upcoming_payout_totals(vendor_id: str):
    """Aggregate the rows that make up the next payout.

    In-progress rows are already attached to the batch being prepared;
    eligible, pending and held rows count only while no payout claims them.
    """
    eligible = BT.status.in_(ELIGIBLE_STATUSES)
    pending = BT.status == "pending_eligibility"
    held = BT.status == "held"

    return select(
        func.count(distinct(case((eligible, BT.order_line_id)))).label("eligible_order_count"),
        func.sum(case((eligible, BT.total_payable_smallest_unit), else_=0)).label(
            "eligible_amount_smallest_unit"
        ),
        func.sum(case((pending, BT.total_payable_smallest_unit), else_=0)).label(
            "pending_amount_smallest_unit"
        ),
        func.count(distinct(case((pending, BT.order_line_id)))).label("pending_order_count"),
        func.count(distinct(case((held, BT.order_line_id)))).label("held_order_count"),
        func.min(case((pending, BT.created_at))).label("earliest_pending_date"),
        func.max(BT.created_at).label("latest_order_date"),
    ).where(
        BT.destination_id == vendor_id,
        _live(BT),
        or_(
            BT.status == "in_progress",
            and_(BT.status.in_(UNLINKED_UPCOMING_STATUSES), BT.payout_id.is_(None)),
        ),
    )


def current_cycle_payout(vendor_id: str):
    return (
        select(
            Payout.id.label("payout_id"),
            Payout.created_at.label("payout_created_at"),
        )
        .select_from(BT)
        .join(Payout, and_(BT.payout_id == Payout.id, _live(Payout)))
        .where(
            BT.destination_id == vendor_id,
            _live(BT),
            BT.status == "in_progress",
        )
        .group_by(Payout.id, Payout.created_at)
        .order_by(Payout.created_at.desc())
        .limit(1)
    )


def _payouts_with_order_counts(vendor_id: str):
    return (
        select(
            Payout.id.label("payout_id"),
            Payout.created_at.label("payout_date"),
            Payout.amount_smallest_unit.label("amount_smallest_unit"),
            Payout.status.label("status"),
            func.count(distinct(BT.order_line_id)).label("order_count"),
        )
        .select_from(Payout)
        .outerjoin(BT, and_(BT.payout_id == Payout.id, _live(BT)))
        .where(Payout.destination_id == vendor_id, _live(Payout))
        .group_by(Payout.id, Payout.created_at, Payout.amount_smallest_unit, Payout.status)
    )


def payout_history(vendor_id: str, limit: int):
    return (
        _payouts_with_order_counts(vendor_id)
        .where(Payout.status == "completed")
        .order_by(Payout.created_at.desc(), Payout.id.desc())
        .limit(limit)
    )


def statements_for_vendor(vendor_id: str):
    # Oldest first so statement numbers follow payout order.
    return _payouts_with_order_counts(vendor_id).order_by(Payout.created_at, Payout.id)


def statement_lines(vendor_id: str, payout_id: int):
    return (
        select(
            BT.order_line_id.label("order_line_id"),
            VP.order_number.label("order_number"),
            VP.title.label("product_name"),
            BT.created_at.label("created_at"),
            BT.status.label("status"),
            BT.base_price_smallest_unit.label("base_price_smallest_unit"),
            BT.chargeable_shipping_smallest_unit.label("chargeable_shipping_smallest_unit"),
            BT.discount_amount_smallest_unit.label("discount_amount_smallest_unit"),
            BT.final_base_smallest_unit.label("final_base_smallest_unit"),
            BT.commission_percentage.label("commission_percentage"),
            BT.shipping_amount_smallest_unit.label("shipping_amount_smallest_unit"),
            BT.cancellation_fee_smallest_unit.label("cancellation_fee_smallest_unit"),
            BT.refund_amount_smallest_unit.label("refund_amount_smallest_unit"),
            BT.previously_paid_smallest_unit.label("previously_paid_smallest_unit"),
            BT.total_smallest_unit.label("total_smallest_unit"),
            BT.total_adjustment_smallest_unit.label("total_adjustment_smallest_unit"),
            BT.total_payable_smallest_unit.label("total_payable_smallest_unit"),
        )
        .select_from(BT)
        .outerjoin(VP, _catalog_join())
        .where(
            BT.payout_id == payout_id,
            BT.destination_id == vendor_id,
            _live(BT),
        )
        .order_by(BT.created_at.desc(), BT.order_line_id)
    )


def blocker_candidates(vendor_id: str):
    return (
        select(
            BT.order_line_id.label("order_id"),
            BT.status.label("status"),
            BT.payout_id.label("payout_id"),
            BT.created_at.label("created_at"),
            VP.qc_status.label("qc_status"),
            VP.ff_status.label("ff_status"),
            VP.ff_time.label("ff_time"),
        )
        .select_from(BT)
        .outerjoin(VP, _catalog_join())
        .where(
            BT.destination_id == vendor_id,
            _live(BT),
            BT.status.in_(HOLD_STATUSES),
            BT.payout_id.is_(None),
        )
        .order_by(BT.created_at.desc(), BT.order_line_id)
    )
