"""
Income statements: one per payout, with a fee breakdown of its order lines.
"""
import logging
from datetime import datetime
from typing import List

from seller_finance.core.exceptions import NotFoundError
from seller_finance.schemas.statements import (
    IncomeStatement,
    StatementBreakdown,
    StatementDetail,
    StatementLine,
)
from seller_finance.services import queries
from seller_finance.services.ledger_reader import LedgerReader
from seller_finance.services.order_projector import commission_split, to_major_units

logger = logging.getLogger(__name__)


def number_statements(rows: List[dict], prefix: str) -> List[IncomeStatement]:
    """Number payouts in the order given (oldest first): PREFIX-YEAR-001, ..."""
    statements = []
    for sequence, row in enumerate(rows, start=1):
        payout_date = row.get("payout_date")
        year = payout_date.year if payout_date else "0000"
        statements.append(
            IncomeStatement(
                payout_id=row["payout_id"],
                statement_number=f"{prefix}-{year}-{sequence:03d}",
                statement_period=payout_date.strftime("%B %Y") if payout_date else "",
                payout_date=payout_date.date() if isinstance(payout_date, datetime) else payout_date,
                amount=to_major_units(row.get("amount_smallest_unit")),
                status=row.get("status") or "unknown",
                order_count=row.get("order_count") or 0,
            )
        )
    return statements


def statement_line(row: dict) -> StatementLine:
    final_base, commission, base_after = commission_split(
        row.get("final_base_smallest_unit"), row.get("commission_percentage")
    )
    return StatementLine(
        order_line_id=str(row["order_line_id"]),
        order_number=row.get("order_number"),
        product_name=row.get("product_name"),
        created_at=row.get("created_at"),
        status=row.get("status") or "unknown",
        base_price=to_major_units(row.get("base_price_smallest_unit")),
        shipping_chargeable=to_major_units(row.get("chargeable_shipping_smallest_unit")),
        discount=to_major_units(row.get("discount_amount_smallest_unit")),
        final_base=final_base,
        commission_percentage=row.get("commission_percentage") or 0.0,
        commission=commission,
        base_after_commission=base_after,
        shipping_payable_to_vendor=to_major_units(row.get("shipping_amount_smallest_unit")),
        cancellation_fee=to_major_units(row.get("cancellation_fee_smallest_unit")),
        refund=to_major_units(row.get("refund_amount_smallest_unit")),
        previously_paid=to_major_units(row.get("previously_paid_smallest_unit")),
        total=to_major_units(row.get("total_smallest_unit")),
        adjustment=to_major_units(row.get("total_adjustment_smallest_unit")),
        total_payable=to_major_units(row.get("total_payable_smallest_unit")),
    )


def statement_breakdown(lines: List[StatementLine]) -> StatementBreakdown:
    """Opening balance is always zero: each statement covers one payout."""
    delivered = sum(line.final_base for line in lines)
    fees = -sum(line.commission for line in lines)
    logistics = -sum(line.shipping_payable_to_vendor for line in lines)
    adjustments = sum(line.adjustment for line in lines)
    return StatementBreakdown(
        opening_balance=0.0,
        delivered_orders=delivered,
        transaction_fees=fees,
        logistics=logistics,
        adjustments=adjustments,
        closing_balance=delivered + fees + logistics + adjustments,
    )


class StatementService:
    def __init__(self, reader: LedgerReader, prefix: str, limit: int = 50):
        self.reader = reader
        self.prefix = prefix
        self.limit = limit

    def _numbered(self, vendor_id: str) -> List[IncomeStatement]:
        rows = self.reader.fetch_all(queries.statements_for_vendor(vendor_id))
        return number_statements(rows, self.prefix)

    def list_statements(self, vendor_id: str) -> List[IncomeStatement]:
        """Newest first, capped at the configured limit."""
        statements = self._numbered(vendor_id)
        statements.reverse()
        return statements[: self.limit]

    def get_statement(self, vendor_id: str, payout_id: int) -> StatementDetail:
        statement = next(
            (s for s in self._numbered(vendor_id) if s.payout_id == payout_id),
            None,
        )
        if statement is None:
            raise NotFoundError(f"Statement not found: payout {payout_id} for vendor {vendor_id}")

        lines = [
            statement_line(row)
            for row in self.reader.fetch_all(queries.statement_lines(vendor_id, payout_id))
        ]
        logger.info(f"Statement {statement.statement_number}: {len(lines)} order lines")
        return StatementDetail(
            statement=statement,
            orders=lines,
            breakdown=statement_breakdown(lines),
        )
