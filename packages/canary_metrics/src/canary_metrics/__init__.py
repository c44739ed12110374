"""Canary Metrics - metric provider adapters for automated canary analysis.

Quick Start:
    from canary_metrics import MetricTemplateProvider, create_provider

    provider = create_provider(
        "30s",
        MetricTemplateProvider(type="datadog"),
        {"datadog_api_key": b"...", "datadog_application_key": b"..."},
    )
    provider.is_online()
    value = provider.run_query("avg:http.errors{service:podinfo}.as_count()")
"""

from canary_metrics.errors import (
    BackendError,
    DecodeError,
    InvalidIntervalError,
    MetricsProviderError,
    MissingCredentialError,
    NetworkError,
    NoValuesFoundError,
    ReadError,
    UnknownProviderError,
)
from canary_metrics.models import DatadogProviderConfig, MetricTemplateProvider
from canary_metrics.providers import DatadogProvider, MetricsProvider, create_provider

__version__ = "0.1.0"

__all__ = [
    # Providers
    "DatadogProvider",
    "MetricsProvider",
    "create_provider",
    # Models
    "DatadogProviderConfig",
    "MetricTemplateProvider",
    # Errors
    "BackendError",
    "DecodeError",
    "InvalidIntervalError",
    "MetricsProviderError",
    "MissingCredentialError",
    "NetworkError",
    "NoValuesFoundError",
    "ReadError",
    "UnknownProviderError",
]
