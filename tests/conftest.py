from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from seller_finance.api.deps import get_data_source
from seller_finance.core.config import Settings
from seller_finance.core.warehouse import create_sqlite_engine, dataset_map
from seller_finance.main import app
from seller_finance.models.ledger import Base, BalanceTransaction, Payout, Vendor, VendorPayout
from seller_finance.services.data_source import WarehouseDataSource
from seller_finance.services.ledger_reader import LedgerReader

# Wednesday
NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


def ago(days):
    return None if days is None else NOW - timedelta(days=days)


def add_order(
    session,
    order_line_id,
    vendor_id,
    status,
    payable,
    days_ago,
    payout_id=None,
    final_base=None,
    commission=10,
    shipping=0,
    title="Vintage Bundle",
    order_number=None,
    qc_status="approved",
    qc_days=None,
    ff_status="completed",
    ff_days=None,
    deleted=False,
):
    """One ledger row plus its catalog row."""
    session.add(
        BalanceTransaction(
            order_line_id=order_line_id,
            destination_id=vendor_id,
            payout_id=payout_id,
            base_price_smallest_unit=payable if final_base is None else final_base,
            final_base_smallest_unit=payable if final_base is None else final_base,
            shipping_amount_smallest_unit=shipping,
            total_smallest_unit=payable,
            total_payable_smallest_unit=payable,
            commission_percentage=commission,
            status=status,
            created_at=ago(days_ago),
            deleted=deleted,
        )
    )
    session.add(
        VendorPayout(
            order_line_id=int(order_line_id),
            order_number=order_number or 100000 + int(order_line_id) % 100000,
            internal_order_id=f"INT-{order_line_id}",
            title=title,
            vendor_id=int(vendor_id),
            customer_name="Test Buyer",
            latest_status=ff_status or qc_status,
            includes_shipping=shipping > 0,
            qc_status=qc_status,
            qc_time=ago(qc_days),
            ff_status=ff_status,
            ff_time=ago(ff_days),
        )
    )


def seed(session):
    session.add_all(
        [
            Vendor(id=2001, handle="scenario-store"),
            Vendor(id=2002, handle="dup-handle"),
            Vendor(id=2003, handle="dup-handle"),
            Vendor(id=2004, handle="gone-store", deleted=True),
            Vendor(id=2005, handle="qc-backlog"),
            Vendor(id=2006, handle="statement-store"),
            Vendor(id=2007, handle="cycle-store"),
        ]
    )

    # eligible, eligible, held at 10% commission plus one soft-deleted row
    add_order(session, "80001", "2001", "eligible", 10000, 5, order_number=111001,
              title="Levi's Denim Bundle x10", qc_days=4, ff_days=3)
    add_order(session, "80002", "2001", "eligible", 20000, 4, order_number=111002,
              title="Carhartt Jacket Mix x5", qc_days=3, ff_days=2)
    add_order(session, "80003", "2001", "held", 5000, 3, order_number=111003,
              title="Burberry Scarves x3", qc_status="rejected", qc_days=2, ff_days=2)
    add_order(session, "80004", "2001", "eligible", 99900, 1, order_number=111004,
              title="Deleted Row", ff_days=1, deleted=True)

    # five orders waiting on QC
    for n in range(5):
        add_order(session, f"8030{n + 1}", "2005", "pending_eligibility", 2000, n + 1,
                  qc_status="pending", ff_days=1)
    add_order(session, "80306", "2005", "pending_eligibility", 2000, 1,
              qc_status="pending", ff_days=1, deleted=True)

    session.add_all(
        [
            Payout(id=801, destination_id="2006", amount_smallest_unit=14800,
                   status="completed", created_at=ago(20)),
            Payout(id=802, destination_id="2006", amount_smallest_unit=9000,
                   status="completed", created_at=ago(6)),
            Payout(id=803, destination_id="2006", amount_smallest_unit=5000,
                   status="failed", created_at=ago(3)),
            Payout(id=804, destination_id="2006", amount_smallest_unit=7777,
                   status="completed", created_at=ago(2), deleted=True),
            Payout(id=901, destination_id="2007", amount_smallest_unit=5000,
                   status="pending", created_at=ago(1)),
        ]
    )
    add_order(session, "80101", "2006", "paid", 8500, 25, payout_id=801, final_base=10000,
              shipping=500, qc_days=24, ff_days=23)
    add_order(session, "80102", "2006", "paid", 6300, 24, payout_id=801, final_base=7000,
              qc_days=23, ff_days=22)
    add_order(session, "80103", "2006", "paid", 9000, 10, payout_id=802, final_base=10000,
              title="Nike 100% Cotton Tees x20", qc_days=9, ff_days=8)

    add_order(session, "80104", "2006", "paid", 4500, 24, payout_id=801, final_base=5000,
              title="Deleted Statement Line", qc_days=23, ff_days=22, deleted=True)

    add_order(session, "80201", "2007", "in_progress", 5000, 2, payout_id=901,
              qc_days=2, ff_days=1)
    add_order(session, "80202", "2007", "held", 3000, 1, qc_status="rejected", qc_days=1,
              ff_status=None, deleted=True)

    session.commit()


@pytest.fixture
def engine():
    engine = create_sqlite_engine().execution_options(
        schema_translate_map=dataset_map(None, None)
    )
    Base.metadata.create_all(bind=engine)

    with Session(engine) as session:
        seed(session)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def reader(engine):
    return LedgerReader(engine)


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def data_source(engine, settings):
    return WarehouseDataSource(engine, settings, clock=lambda: NOW)


@pytest.fixture
def client(data_source):
    app.dependency_overrides[get_data_source] = lambda: data_source
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
