from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class VendorResponse(BaseModel):
    id: str


class HealthResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, validate_by_name=True, validate_by_alias=True
    )

    status: str
    message: str
    data_source: str


class ClientConfig(BaseModel):
    """Settings the dashboard needs at boot, including its refetch cadence."""

    model_config = ConfigDict(
        alias_generator=to_camel, validate_by_name=True, validate_by_alias=True
    )

    use_warehouse: bool
    default_vendor: str
    poll_interval_seconds: int
