from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class IncomeStatement(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, validate_by_name=True, validate_by_alias=True
    )

    payout_id: int
    statement_number: str
    statement_period: str
    payout_date: Optional[date] = None
    amount: float
    status: str
    order_count: int


class StatementLine(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, validate_by_name=True, validate_by_alias=True
    )

    order_line_id: str
    order_number: Optional[int] = None
    product_name: Optional[str] = None
    created_at: Optional[datetime] = None
    status: str

    base_price: float
    shipping_chargeable: float
    discount: float
    final_base: float
    commission_percentage: float
    commission: float
    base_after_commission: float
    shipping_payable_to_vendor: float
    cancellation_fee: float
    refund: float
    previously_paid: float
    total: float
    adjustment: float
    total_payable: float


class StatementBreakdown(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, validate_by_name=True, validate_by_alias=True
    )

    opening_balance: float
    delivered_orders: float
    transaction_fees: float
    logistics: float
    adjustments: float
    closing_balance: float


class StatementDetail(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, validate_by_name=True, validate_by_alias=True
    )

    statement: IncomeStatement
    orders: List[StatementLine]
    breakdown: StatementBreakdown
