"""Environment configuration for metric providers.

Connection defaults that operators may need to change per deployment. The
policy constants (API paths, header names, lookback multiplier) live with the
provider they belong to and are not configurable.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class DatadogSettings(BaseSettings):
    """Connection defaults for the Datadog provider."""

    default_host: str = Field(
        default="https://api.datadoghq.com",
        description="Base address used when the metric template does not set one",
    )
    timeout_sec: float = Field(
        default=5.0,
        gt=0,
        description="Bound on every network call, covering connect and body read",
    )

    model_config = {"env_prefix": "CANARY_METRICS_DATADOG_"}
