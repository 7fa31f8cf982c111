from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Order(BaseModel):
    """Financial breakdown of one order line, amounts in GBP."""

    model_config = ConfigDict(
        alias_generator=to_camel, validate_by_name=True, validate_by_alias=True
    )

    order_id: str
    order_number: Optional[int] = None
    internal_order_id: Optional[str] = None
    product_name: Optional[str] = None
    vendor: Optional[str] = None
    vendor_id: Optional[int] = None
    customer_name: Optional[str] = None

    payout_status: str
    created_at: Optional[datetime] = None
    latest_status: Optional[str] = None
    eligibility_date: Optional[date] = None
    days_until_eligible: Optional[int] = None

    original_final_base: float
    commission_percentage: float
    original_commission: float
    base_after_commission: float
    vendor_shipping_cost: float
    supplier_refund: float
    cancellation_fee: float
    total_paid_amount: float
    includes_shipping: bool = False

    qc_status: Optional[str] = None
    ff_status: Optional[str] = None
    hold_reasons: List[str] = []

    # Legacy aliases kept for older dashboard builds
    status: str
    amount: float
    completed_at: Optional[datetime] = None
