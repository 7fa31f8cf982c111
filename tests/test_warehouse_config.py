import json

import pytest

from seller_finance.core.config import Settings
from seller_finance.core.exceptions import ConfigurationError
from seller_finance.core.warehouse import create_warehouse_engine, dataset_map, load_service_account
from seller_finance.services.data_source import (
    SampleDataSource,
    WarehouseDataSource,
    build_data_source,
)


def live_settings(**overrides):
    values = dict(USE_WAREHOUSE=True, WAREHOUSE_URL=None, WAREHOUSE_CREDENTIALS=None)
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.mark.parametrize("raw", [None, ""])
def test_missing_credentials(raw):
    with pytest.raises(ConfigurationError, match="WAREHOUSE_CREDENTIALS is not set"):
        load_service_account(raw)


def test_credentials_must_be_json():
    with pytest.raises(ConfigurationError, match="not valid JSON"):
        load_service_account("{not json")


def test_credentials_must_be_an_object():
    with pytest.raises(ConfigurationError, match="must be a JSON object"):
        load_service_account(json.dumps(["service_account"]))


def test_incomplete_service_account():
    with pytest.raises(ConfigurationError, match="not a usable service account"):
        load_service_account(json.dumps({"type": "service_account"}))


def test_live_mode_without_credentials_refuses_to_start():
    with pytest.raises(ConfigurationError):
        build_data_source(live_settings())


def test_warehouse_url_override_maps_datasets():
    engine = create_warehouse_engine(live_settings(WAREHOUSE_URL="sqlite://"))

    assert engine.get_execution_options()["schema_translate_map"] == {
        "ledger": "aurora_postgres_public",
        "analytics": "fleek_analytics",
    }
    engine.dispose()


def test_empty_dataset_names_mean_unqualified_tables():
    assert dataset_map("", None) == {"ledger": None, "analytics": None}


def test_build_data_source_picks_warehouse_when_enabled():
    source = build_data_source(live_settings(WAREHOUSE_URL="sqlite://"))
    assert isinstance(source, WarehouseDataSource)
    assert source.name == "warehouse"
    source.close()


def test_build_data_source_defaults_to_sample():
    source = build_data_source(Settings(_env_file=None, USE_WAREHOUSE=False))
    assert isinstance(source, SampleDataSource)
    assert source.name == "sample"
    source.close()
