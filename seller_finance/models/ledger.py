"""
Warehouse tables read by the seller finance API.

The tables are owned by the marketplace ledger and replicated into the
warehouse; this service only ever selects from them. Schemas are symbolic
names translated to real datasets per engine (see core/warehouse.py).
"""
from sqlalchemy import BigInteger, Boolean, Column, DateTime, Float, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()

LEDGER_SCHEMA = "ledger"
ANALYTICS_SCHEMA = "analytics"


class Vendor(Base):
    __tablename__ = "vendors"
    __table_args__ = {"schema": LEDGER_SCHEMA}

    id = Column(Integer, primary_key=True)
    handle = Column(String, index=True)  # public slug, e.g. "vibe-vintage"
    deleted = Column("_fivetran_deleted", Boolean, default=False, nullable=False)


class BalanceTransaction(Base):
    """One ledger entry per order line; amounts are in pence."""
    __tablename__ = "balance_transaction"
    __table_args__ = {"schema": LEDGER_SCHEMA}

    id = Column(Integer, primary_key=True)
    order_line_id = Column(String, nullable=False, index=True)
    destination_id = Column(String, nullable=False, index=True)  # vendor id
    payout_id = Column(Integer, nullable=True, index=True)

    base_price_smallest_unit = Column(BigInteger, default=0)
    final_base_smallest_unit = Column(BigInteger, default=0)
    shipping_amount_smallest_unit = Column(BigInteger, default=0)
    chargeable_shipping_smallest_unit = Column(BigInteger, default=0)
    refund_amount_smallest_unit = Column(BigInteger, default=0)
    cancellation_fee_smallest_unit = Column(BigInteger, default=0)
    discount_amount_smallest_unit = Column(BigInteger, default=0)
    previously_paid_smallest_unit = Column(BigInteger, default=0)
    total_smallest_unit = Column(BigInteger, default=0)
    total_adjustment_smallest_unit = Column(BigInteger, default=0)
    total_payable_smallest_unit = Column(BigInteger, default=0)
    commission_percentage = Column(Float, default=0.0)  # 0-100

    # in_progress, completed, eligible, pending_eligibility, held, paid, failed, cancelled
    status = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    deleted = Column("_fivetran_deleted", Boolean, default=False, nullable=False)


class Payout(Base):
    """A batch transfer to a vendor covering one or more balance transactions."""
    __tablename__ = "payout"
    __table_args__ = {"schema": LEDGER_SCHEMA}

    id = Column(Integer, primary_key=True)
    destination_type = Column(String, default="vendor")
    destination_id = Column(String, nullable=False, index=True)
    amount_smallest_unit = Column(BigInteger, default=0)
    currency = Column(String, default="GBP")
    status = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    deleted = Column("_fivetran_deleted", Boolean, default=False, nullable=False)


class VendorPayout(Base):
    """Denormalized catalog and fulfilment view, one row per order line."""
    __tablename__ = "vendor_payout"
    __table_args__ = {"schema": ANALYTICS_SCHEMA}

    order_line_id = Column(Integer, primary_key=True)
    order_number = Column(Integer, index=True)
    internal_order_id = Column(String)
    title = Column(String)  # product name
    vendor = Column(String)  # vendor handle
    vendor_id = Column(Integer)
    customer_name = Column(String)
    latest_status = Column(String)
    includes_shipping = Column("includesShipping", Boolean, default=False)
    qc_status = Column(String)
    qc_time = Column(DateTime(timezone=True), nullable=True)
    ff_status = Column(String)
    ff_time = Column(DateTime(timezone=True), nullable=True)
