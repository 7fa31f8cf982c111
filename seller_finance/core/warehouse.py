"""
Warehouse engine construction.
"""
import json
import logging
from typing import Optional

from google.oauth2 import service_account
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from seller_finance.core.config import Settings
from seller_finance.core.exceptions import ConfigurationError
from seller_finance.models.ledger import ANALYTICS_SCHEMA, LEDGER_SCHEMA

logger = logging.getLogger(__name__)

BIGQUERY_SCOPES = ["https://www.googleapis.com/auth/bigquery.readonly"]


def dataset_map(ledger_dataset: Optional[str], analytics_dataset: Optional[str]) -> dict:
    """Map the symbolic model schemas onto real datasets (None = unqualified)."""
    return {
        LEDGER_SCHEMA: ledger_dataset or None,
        ANALYTICS_SCHEMA: analytics_dataset or None,
    }


def load_service_account(raw_credentials: Optional[str]):
    """Parse the service account JSON held in WAREHOUSE_CREDENTIALS.

    Returns the decoded info dict together with the google-auth credentials
    built from it, so malformed keys fail here rather than on first query.
    """
    if not raw_credentials:
        raise ConfigurationError(
            "WAREHOUSE_CREDENTIALS is not set. "
            "Provide the warehouse service account JSON or set WAREHOUSE_URL."
        )

    try:
        info = json.loads(raw_credentials)
    except ValueError as e:
        raise ConfigurationError(f"WAREHOUSE_CREDENTIALS is not valid JSON: {e}") from e

    if not isinstance(info, dict):
        raise ConfigurationError("WAREHOUSE_CREDENTIALS must be a JSON object")

    try:
        credentials = service_account.Credentials.from_service_account_info(
            info, scopes=BIGQUERY_SCOPES
        )
    except (ValueError, KeyError) as e:
        raise ConfigurationError(f"WAREHOUSE_CREDENTIALS is not a usable service account: {e}") from e

    return info, credentials


def create_sqlite_engine(url: str = "sqlite://") -> Engine:
    """SQLite engine shared across threads; used for sample data and local runs."""
    return create_engine(
        url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def create_warehouse_engine(settings: Settings) -> Engine:
    """Build the read-only warehouse engine described by settings.

    WAREHOUSE_URL wins when present (any SQLAlchemy URL, e.g. a local SQLite
    file seeded by scripts/seed_local_warehouse.py). Otherwise a BigQuery
    engine is created from the service account in WAREHOUSE_CREDENTIALS.
    """
    if settings.WAREHOUSE_URL:
        url = settings.WAREHOUSE_URL
        if url.startswith("sqlite"):
            engine = create_sqlite_engine(url)
        else:
            engine = create_engine(url, pool_pre_ping=True)
        logger.info(f"Using warehouse at {engine.url.render_as_string(hide_password=True)}")
    else:
        info, credentials = load_service_account(settings.WAREHOUSE_CREDENTIALS)
        project_id = settings.WAREHOUSE_PROJECT_ID or credentials.project_id
        if not project_id:
            raise ConfigurationError(
                "WAREHOUSE_PROJECT_ID is not set and the service account has no project_id"
            )

        engine_kwargs = {"credentials_info": info}
        if settings.WAREHOUSE_LOCATION:
            engine_kwargs["location"] = settings.WAREHOUSE_LOCATION

        engine = create_engine(f"bigquery://{project_id}", **engine_kwargs)
        logger.info(
            f"Using BigQuery project {project_id} as {credentials.service_account_email}"
        )

    return engine.execution_options(
        schema_translate_map=dataset_map(settings.LEDGER_DATASET, settings.ANALYTICS_DATASET)
    )
