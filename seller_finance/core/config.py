from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Seller Finance Portal API"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    # Data source selection: sample fixture unless the warehouse is switched on
    USE_WAREHOUSE: bool = False
    WAREHOUSE_URL: Optional[str] = None
    WAREHOUSE_PROJECT_ID: Optional[str] = None
    WAREHOUSE_CREDENTIALS: Optional[str] = None  # service account JSON
    WAREHOUSE_LOCATION: Optional[str] = None
    LEDGER_DATASET: Optional[str] = "aurora_postgres_public"
    ANALYTICS_DATASET: Optional[str] = "fleek_analytics"
    WAREHOUSE_MAX_RETRIES: int = 0
    WAREHOUSE_RETRY_BACKOFF_SECONDS: float = 0.5
    QUERY_LOG_CHARS: int = 200

    DEFAULT_VENDOR: str = "vibe-vintage"
    POLL_INTERVAL_SECONDS: int = 60

    # Payout cycle: 0=Monday ... 6=Sunday
    PAYOUT_WEEKDAY: int = 0
    PAYOUT_PROCESSING_DAYS: int = 0
    PAYOUT_HISTORY_LIMIT: int = 5

    ORDERS_DEFAULT_LIMIT: int = 100
    ORDERS_MAX_LIMIT: int = 500
    STATEMENTS_LIMIT: int = 50
    STATEMENT_PREFIX: str = "PK2NBY8TW72"

    TRUST_SCORE_BASELINE: int = 75

    # This configures Pydantic to read variables from the ".env" file
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
