"""
Seller endpoints - orders, payout summary, payout history and statements.

Every route accepts a numeric vendor ID or a vendor handle.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from seller_finance.api.deps import get_data_source
from seller_finance.schemas.orders import Order
from seller_finance.schemas.payout import PayoutHistoryItem, PayoutOverview
from seller_finance.schemas.statements import IncomeStatement, StatementDetail
from seller_finance.services.data_source import FinanceDataSource

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{vendor_id}/orders", response_model=List[Order])
def list_orders(
    vendor_id: str,
    status: Optional[str] = Query(None, description="Payout status, or 'all'"),
    search: Optional[str] = Query(
        None, description="Matches order number, internal order ID or product name"
    ),
    limit: Optional[int] = Query(None, description="Defaults to ORDERS_DEFAULT_LIMIT"),
    offset: int = 0,
    source: FinanceDataSource = Depends(get_data_source),
):
    """
    Returns the seller's orders with their full financial breakdown,
    newest first.
    """
    seller_id = source.resolve_seller(vendor_id)
    orders = source.list_orders(seller_id, status=status, search=search, limit=limit, offset=offset)
    logger.info(f"Seller {seller_id}: returning {len(orders)} orders")
    return orders


@router.get("/{vendor_id}/orders/{order_id}", response_model=Order)
def get_order(
    vendor_id: str,
    order_id: str,
    source: FinanceDataSource = Depends(get_data_source),
):
    """Single order line with eligibility estimate and hold reasons."""
    return source.get_order(source.resolve_seller(vendor_id), order_id)


@router.get("/{vendor_id}/payout", response_model=PayoutOverview)
def get_payout_overview(
    vendor_id: str,
    source: FinanceDataSource = Depends(get_data_source),
):
    """
    Returns complete payout data for the dashboard:
    upcoming payout summary, payout history, trust score and active blockers.
    """
    return source.get_payout_overview(source.resolve_seller(vendor_id))


@router.get("/{vendor_id}/payout-history", response_model=List[PayoutHistoryItem])
def get_payout_history(
    vendor_id: str,
    limit: int = Query(10, ge=1, le=100),
    source: FinanceDataSource = Depends(get_data_source),
):
    """Most recent completed payouts, newest first."""
    return source.list_payout_history(source.resolve_seller(vendor_id), limit)


@router.get("/{vendor_id}/statements", response_model=List[IncomeStatement])
def list_statements(
    vendor_id: str,
    source: FinanceDataSource = Depends(get_data_source),
):
    """Income statements, one per payout, newest first."""
    return source.list_statements(source.resolve_seller(vendor_id))


@router.get("/{vendor_id}/statements/{payout_id}", response_model=StatementDetail)
def get_statement(
    vendor_id: str,
    payout_id: int,
    source: FinanceDataSource = Depends(get_data_source),
):
    """Statement detail with per-order lines and the fee breakdown."""
    return source.get_statement(source.resolve_seller(vendor_id), payout_id)
