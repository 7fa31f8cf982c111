"""
Read-only access to the ledger warehouse.
"""
import logging
import time
from typing import Any, Dict, List, Optional

from sqlalchemy import literal, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

from seller_finance.core.exceptions import QueryExecutionError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class LedgerReader:
    """Runs SELECT statements against the warehouse and returns plain rows.

    Every value a statement filters on is a bound parameter; nothing is
    interpolated into SQL text. Failures surface as QueryExecutionError.
    Retries are off unless max_retries is raised, and then only apply to
    transient connection errors.
    """

    def __init__(
        self,
        engine: Engine,
        max_retries: int = 0,
        backoff_seconds: float = 0.5,
        log_chars: int = 200,
    ):
        self.engine = engine
        self.max_retries = max(0, max_retries)
        self.backoff_seconds = backoff_seconds
        self.log_chars = log_chars

    def fetch_all(self, statement) -> List[Row]:
        if not getattr(statement, "is_select", False):
            raise QueryExecutionError("Refusing to execute a statement that is not a SELECT")

        sql = self._render(statement)
        logger.info(f"Executing query: {sql[: self.log_chars]}...")

        rows = self._run_with_retry(statement)

        logger.info(f"Query returned {len(rows)} rows")
        return rows

    def fetch_one(self, statement) -> Optional[Row]:
        rows = self.fetch_all(statement)
        return rows[0] if rows else None

    def ping(self) -> bool:
        return self.fetch_one(select(literal(1).label("ok"))) is not None

    def _render(self, statement) -> str:
        try:
            return " ".join(str(statement.compile(dialect=self.engine.dialect)).split())
        except SQLAlchemyError:
            return repr(statement)

    def _execute(self, statement) -> List[Row]:
        with self.engine.connect() as conn:
            result = conn.execute(statement)
            if not result.returns_rows:
                raise QueryExecutionError("Warehouse response did not contain rows")
            return [dict(row) for row in result.mappings()]

    def _is_transient(self, exc: SQLAlchemyError) -> bool:
        if isinstance(exc, OperationalError):
            return True
        return isinstance(exc, DBAPIError) and exc.connection_invalidated

    def _run_with_retry(self, statement) -> List[Row]:
        attempts = self.max_retries + 1
        for attempt in range(attempts):
            try:
                return self._execute(statement)
            except SQLAlchemyError as e:
                if attempt < attempts - 1 and self._is_transient(e):
                    delay = self.backoff_seconds * (2 ** attempt)
                    logger.warning(
                        f"Transient warehouse error (attempt {attempt + 1}/{attempts}), "
                        f"retrying in {delay:.2f}s: {e}"
                    )
                    time.sleep(delay)
                    continue
                logger.error(f"Query failed: {e}")
                raise QueryExecutionError(f"Warehouse query failed: {e}") from e
