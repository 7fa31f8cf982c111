from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

CAMEL = ConfigDict(alias_generator=to_camel, validate_by_name=True, validate_by_alias=True)

Severity = Literal["low", "medium", "high", "info", "warning", "error"]


class ActiveBlocker(BaseModel):
    model_config = CAMEL

    reason_code: str
    severity: Severity
    title: str
    description: str
    action_required: bool = False
    estimated_resolution: str = ""
    order_count: int = 1


class TrustScoreDriver(BaseModel):
    model_config = CAMEL

    factor: str
    impact: int
    description: str


class TrustScore(BaseModel):
    model_config = CAMEL

    score: int
    risk_level: Literal["low", "medium", "high"]
    top_drivers: List[TrustScoreDriver]
    trend: Literal["improving", "stable", "declining"]


class PayoutHistoryItem(BaseModel):
    model_config = CAMEL

    payout_id: int
    payout_date: Optional[date] = None
    amount: float
    status: Literal["completed", "pending", "failed"]
    order_count: int


class PayoutOverview(BaseModel):
    """Everything the dashboard shows about the next payout."""

    model_config = CAMEL

    seller_id: str
    current_cycle: str
    estimated_payout_date: date
    confidence: Literal["high", "medium", "low"]
    total_amount: float
    eligible_amount: float
    pending_amount: float
    days_until_payout: int
    eligible_orders: int
    pending_orders: int
    held_orders: int
    payout_history: List[PayoutHistoryItem]
    trust_score: TrustScore
    active_blockers: List[ActiveBlocker]
