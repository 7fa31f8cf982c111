"""
Sample warehouse for development without BigQuery access.

The fixture is loaded into an in-memory SQLite database shaped like the real
warehouse, so sample mode runs exactly the same queries as live mode. Dates
are placed relative to the moment of seeding to keep the dashboard current.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from seller_finance.core.warehouse import create_sqlite_engine, dataset_map
from seller_finance.models.ledger import Base, BalanceTransaction, Payout, Vendor, VendorPayout

logger = logging.getLogger(__name__)

SAMPLE_VENDORS = [
    # (id, handle, deleted)
    (1001, "vibe-vintage", False),
    (1002, "creed-vintage", False),
    (1003, "thrift-kings", True),
]

SAMPLE_PAYOUTS = [
    # (id, vendor id, pence, status, days ago)
    (501, "1001", 42500, "completed", 35),
    (502, "1001", 38000, "completed", 28),
    (503, "1001", 31500, "completed", 21),
    (504, "1001", 27000, "completed", 14),
    (505, "1001", 15000, "pending", 1),
    (601, "1002", 12000, "completed", 10),
]

SAMPLE_ORDERS = [
    # (order line, vendor id, payout id, status, final base, commission %, shipping,
    #  refund, cancellation fee, total payable, days ago,
    #  order number, product, qc status, qc days ago, ff status, ff days ago)
    ("70001", "1001", 501, "paid", 25000, 15, 450, 0, 0, 21700, 48,
     880101, "Levi's 501 Denim Bundle x10", "approved", 45, "completed", 44),
    ("70002", "1001", 501, "paid", 24000, 15, 450, 0, 0, 20850, 47,
     880102, "Carhartt Jacket Mix x5", "approved", 44, "completed", 43),
    ("70003", "1001", 502, "paid", 45000, 15, 700, 0, 0, 38000, 40,
     880210, "Harley Davidson Tees x20", "approved", 38, "completed", 37),
    ("70004", "1001", 503, "paid", 37000, 15, 0, 0, 0, 31500, 33,
     880355, "Nike Windbreakers x8", "approved", 30, "completed", 29),
    ("70005", "1001", 504, "paid", 33000, 15, 1050, 0, 0, 27000, 26,
     880412, "Ralph Lauren Knitwear x12", "approved", 24, "completed", 22),
    ("70006", "1001", 505, "in_progress", 10000, 10, 0, 0, 0, 9000, 12,
     880520, "Y2K Graphic Tees x15", "approved", 10, "completed", 9),
    ("70007", "1001", 505, "in_progress", 7000, 10, 300, 0, 0, 6000, 11,
     880521, "Adidas Track Tops x6", "approved", 9, "completed", 8),
    ("70008", "1001", None, "eligible", 16000, 10, 0, 0, 0, 14400, 9,
     880601, "Vintage Football Shirts x10", "approved", 8, "completed", 8),
    ("70009", "1001", None, "eligible", 9000, 10, 0, 1500, 0, 6600, 8,
     880602, "Champion Sweatshirts x6", "approved", 7, "completed", 6),
    ("70010", "1001", None, "pending_eligibility", 12000, 10, 0, 0, 0, 10800, 4,
     880710, "Patagonia Fleece x4", "approved", 3, "in_transit", None),
    ("70011", "1001", None, "pending_eligibility", 8000, 10, 0, 0, 0, 7200, 2,
     880711, "Tommy Hilfiger Polos x10", "pending", None, None, None),
    ("70012", "1001", None, "held", 5000, 10, 0, 0, 0, 4500, 6,
     880712, "Burberry Scarves x3", "rejected", 5, None, None),
    ("70013", "1001", None, "cancelled", 6000, 10, 0, 0, 1000, 0, 5,
     880713, "Stussy Caps x12", "approved", 4, None, None),
    ("70014", "1002", 601, "paid", 14000, 12, 0, 0, 0, 12000, 15,
     990101, "Wrangler Jeans x8", "approved", 13, "completed", 12),
    ("70015", "1002", None, "eligible", 11000, 12, 0, 0, 0, 9680, 5,
     990102, "Columbia Fleece x5", "approved", 4, "completed", 3),
]


def _ago(now: datetime, days: Optional[int]) -> Optional[datetime]:
    return None if days is None else now - timedelta(days=days)


def seed_sample_data(session: Session, now: Optional[datetime] = None) -> None:
    now = now or datetime.now(timezone.utc)
    handles = {str(vendor_id): handle for vendor_id, handle, _ in SAMPLE_VENDORS}

    session.add_all(
        Vendor(id=vendor_id, handle=handle, deleted=deleted)
        for vendor_id, handle, deleted in SAMPLE_VENDORS
    )
    session.add_all(
        Payout(
            id=payout_id,
            destination_id=vendor_id,
            amount_smallest_unit=amount,
            status=status,
            created_at=_ago(now, days),
        )
        for payout_id, vendor_id, amount, status, days in SAMPLE_PAYOUTS
    )

    for (order_line_id, vendor_id, payout_id, status, final_base, commission, shipping,
         refund, fee, payable, days, order_number, title, qc_status, qc_days,
         ff_status, ff_days) in SAMPLE_ORDERS:
        session.add(
            BalanceTransaction(
                order_line_id=order_line_id,
                destination_id=vendor_id,
                payout_id=payout_id,
                base_price_smallest_unit=final_base,
                final_base_smallest_unit=final_base,
                shipping_amount_smallest_unit=shipping,
                refund_amount_smallest_unit=refund,
                cancellation_fee_smallest_unit=fee,
                total_smallest_unit=payable,
                total_payable_smallest_unit=payable,
                commission_percentage=commission,
                status=status,
                created_at=_ago(now, days),
            )
        )
        session.add(
            VendorPayout(
                order_line_id=int(order_line_id),
                order_number=order_number,
                internal_order_id=f"FLK-{order_number}",
                title=title,
                vendor=handles[vendor_id],
                vendor_id=int(vendor_id),
                customer_name="Sample Buyer Ltd",
                latest_status=ff_status or qc_status,
                includes_shipping=shipping > 0,
                qc_status=qc_status,
                qc_time=_ago(now, qc_days),
                ff_status=ff_status,
                ff_time=_ago(now, ff_days),
            )
        )

    session.commit()


def create_sample_engine(now: Optional[datetime] = None) -> Engine:
    """In-memory warehouse loaded with the sample fixture."""
    engine = create_sqlite_engine().execution_options(
        schema_translate_map=dataset_map(None, None)
    )
    Base.metadata.create_all(bind=engine)

    with Session(engine) as session:
        seed_sample_data(session, now)

    logger.info(
        f"Sample warehouse ready: {len(SAMPLE_VENDORS)} vendors, "
        f"{len(SAMPLE_ORDERS)} order lines, {len(SAMPLE_PAYOUTS)} payouts"
    )
    return engine
