"""Pydantic models for metric providers.

- MetricTemplateProvider: the provider block of a canary metric template
- DatadogProviderConfig: immutable connection state for one metric template
- DatadogQueryResponse: decoded body of a Datadog metrics query
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class MetricTemplateProvider(BaseModel):
    """Provider section of a metric template, as handed over by the controller."""

    type: str = Field(description="Provider type, e.g. 'datadog'")
    address: str = Field(default="", description="Backend base address; empty means default")


class DatadogProviderConfig(BaseModel):
    """Connection state for one metric template. Never mutated after construction."""

    model_config = ConfigDict(frozen=True)

    query_endpoint: str
    validation_endpoint: str
    api_key: str = Field(repr=False)
    application_key: str = Field(repr=False)
    timeout_sec: float = Field(gt=0)
    lookback_seconds: int = Field(ge=0)


class DatadogSeries(BaseModel):
    # Datadog reports gaps in a series as null values
    pointlist: list[list[float | None]] = []

    @field_validator("pointlist", mode="before")
    @classmethod
    def null_pointlist_is_empty(cls, v: object) -> object:
        return [] if v is None else v


class DatadogQueryResponse(BaseModel):
    series: list[DatadogSeries] = []

    @field_validator("series", mode="before")
    @classmethod
    def null_series_is_empty(cls, v: object) -> object:
        return [] if v is None else v


# A bare JSON null body decodes to None and is treated as an empty response.
QUERY_RESPONSE_ADAPTER: TypeAdapter[DatadogQueryResponse | None] = TypeAdapter(
    DatadogQueryResponse | None
)
