"""
Data sources behind the HTTP handlers.

A single FinanceDataSource is built at startup (see build_data_source) and
injected into every request. The live source reads BigQuery; the sample
source reads an in-memory copy of the same schema.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy.engine import Engine

from seller_finance.core.config import Settings
from seller_finance.core.exceptions import NotFoundError
from seller_finance.core.warehouse import create_warehouse_engine
from seller_finance.schemas.orders import Order
from seller_finance.schemas.payout import ActiveBlocker, PayoutHistoryItem, PayoutOverview
from seller_finance.schemas.statements import IncomeStatement, StatementDetail
from seller_finance.services import queries
from seller_finance.services.blockers import active_blockers
from seller_finance.services.ledger_reader import LedgerReader
from seller_finance.services.order_projector import OrderProjector
from seller_finance.services.payout_aggregator import PayoutAggregator
from seller_finance.services.sample_data import create_sample_engine
from seller_finance.services.statements import StatementService
from seller_finance.services.trust_score import StaticTrustScoreProvider, TrustScoreProvider
from seller_finance.services.vendor_resolver import VendorResolver

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FinanceDataSource(ABC):
    """Everything the request handlers can ask for."""

    name = "abstract"

    @abstractmethod
    def resolve_vendor(self, handle: str) -> str: ...

    @abstractmethod
    def resolve_seller(self, value: str) -> str: ...

    @abstractmethod
    def list_orders(
        self,
        vendor_id: str,
        status: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Order]: ...

    @abstractmethod
    def get_order(self, vendor_id: str, order_id: str) -> Order: ...

    @abstractmethod
    def get_payout_overview(self, vendor_id: str) -> PayoutOverview: ...

    @abstractmethod
    def list_payout_history(self, vendor_id: str, limit: int) -> List[PayoutHistoryItem]: ...

    @abstractmethod
    def list_statements(self, vendor_id: str) -> List[IncomeStatement]: ...

    @abstractmethod
    def get_statement(self, vendor_id: str, payout_id: int) -> StatementDetail: ...

    @abstractmethod
    def is_healthy(self) -> bool: ...

    def close(self) -> None:
        pass


class WarehouseDataSource(FinanceDataSource):
    name = "warehouse"

    def __init__(
        self,
        engine: Engine,
        settings: Settings,
        trust_provider: Optional[TrustScoreProvider] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.engine = engine
        self.settings = settings
        self.clock = clock
        self.reader = LedgerReader(
            engine,
            max_retries=settings.WAREHOUSE_MAX_RETRIES,
            backoff_seconds=settings.WAREHOUSE_RETRY_BACKOFF_SECONDS,
            log_chars=settings.QUERY_LOG_CHARS,
        )
        self.vendors = VendorResolver(self.reader)
        self.projector = OrderProjector()
        self.payouts = PayoutAggregator(
            self.reader,
            payout_weekday=settings.PAYOUT_WEEKDAY,
            processing_days=settings.PAYOUT_PROCESSING_DAYS,
        )
        self.statements = StatementService(
            self.reader, prefix=settings.STATEMENT_PREFIX, limit=settings.STATEMENTS_LIMIT
        )
        self.trust = trust_provider or StaticTrustScoreProvider(settings.TRUST_SCORE_BASELINE)

    def resolve_vendor(self, handle: str) -> str:
        return self.vendors.resolve(handle)

    def resolve_seller(self, value: str) -> str:
        return self.vendors.resolve_seller(value)

    def list_orders(self, vendor_id, status=None, search=None, limit=None, offset=0):
        filters = queries.OrderFilters.build(
            status=status,
            search=search,
            limit=self.settings.ORDERS_DEFAULT_LIMIT if limit is None else limit,
            offset=offset,
            max_limit=self.settings.ORDERS_MAX_LIMIT,
        )
        rows = self.reader.fetch_all(queries.orders_for_vendor(vendor_id, filters))
        return self.projector.project_all(rows, self.clock())

    def get_order(self, vendor_id, order_id):
        row = self.reader.fetch_one(queries.order_for_vendor(vendor_id, order_id))
        if row is None:
            raise NotFoundError(f"Order not found: {order_id}")
        return self.projector.project(row, self.clock())

    def active_blockers(self, vendor_id: str) -> List[ActiveBlocker]:
        return active_blockers(self.reader.fetch_all(queries.blocker_candidates(vendor_id)))

    def get_payout_overview(self, vendor_id):
        today = self.clock().date()
        totals = self.payouts.upcoming_totals(vendor_id)
        history = self.payouts.payout_history(vendor_id, self.settings.PAYOUT_HISTORY_LIMIT)
        blockers = self.active_blockers(vendor_id)
        trust_score = self.trust.compute(vendor_id)
        return self.payouts.overview(vendor_id, totals, history, blockers, trust_score, today)

    def list_payout_history(self, vendor_id, limit):
        return self.payouts.payout_history(vendor_id, limit)

    def list_statements(self, vendor_id):
        return self.statements.list_statements(vendor_id)

    def get_statement(self, vendor_id, payout_id):
        return self.statements.get_statement(vendor_id, payout_id)

    def is_healthy(self) -> bool:
        return self.reader.ping()

    def close(self) -> None:
        self.engine.dispose()


class SampleDataSource(WarehouseDataSource):
    """Live code paths over the bundled fixture."""

    name = "sample"

    def __init__(self, settings: Settings, **kwargs):
        super().__init__(create_sample_engine(), settings, **kwargs)


def build_data_source(settings: Settings) -> FinanceDataSource:
    """Pick the data source once, from USE_WAREHOUSE."""
    if settings.USE_WAREHOUSE:
        logger.info("USE_WAREHOUSE is on: reading seller data from the warehouse")
        return WarehouseDataSource(create_warehouse_engine(settings), settings)

    logger.info("USE_WAREHOUSE is off: serving the sample fixture")
    return SampleDataSource(settings)
