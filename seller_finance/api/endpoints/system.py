import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from seller_finance.api.deps import get_data_source
from seller_finance.core.config import settings
from seller_finance.core.exceptions import QueryExecutionError
from seller_finance.schemas.system import ClientConfig, HealthResponse
from seller_finance.services.data_source import FinanceDataSource

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check(source: FinanceDataSource = Depends(get_data_source)):
    """Health check endpoint that verifies the data source answers queries."""
    try:
        if not source.is_healthy():
            raise QueryExecutionError("Data source returned no rows")
    except QueryExecutionError as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unavailable",
                "message": f"Data source unreachable: {e.message}",
                "dataSource": source.name,
            },
        )

    return HealthResponse(
        status="ok",
        message="Seller Finance Portal API is running",
        data_source=source.name,
    )


@router.get("/config", response_model=ClientConfig)
def client_config():
    """Boot-time settings for the dashboard, including how often to refetch."""
    return ClientConfig(
        use_warehouse=settings.USE_WAREHOUSE,
        default_vendor=settings.DEFAULT_VENDOR,
        poll_interval_seconds=settings.POLL_INTERVAL_SECONDS,
    )
