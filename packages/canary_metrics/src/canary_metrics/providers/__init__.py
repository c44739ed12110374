"""Metric provider protocol and factory.

A provider turns a backend-specific query into one scalar for canary
analysis, and can report whether its backend is reachable with the
configured credentials.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from canary_metrics.errors import UnknownProviderError
from canary_metrics.providers.datadog import DatadogProvider

if TYPE_CHECKING:
    import httpx

    from canary_metrics.models import MetricTemplateProvider


@runtime_checkable
class MetricsProvider(Protocol):
    def run_query(self, query: str) -> float: ...

    def is_online(self) -> bool: ...


PROVIDERS: dict[str, type[DatadogProvider]] = {
    "datadog": DatadogProvider,
}


def create_provider(
    metric_interval: str,
    provider: MetricTemplateProvider,
    credentials: Mapping[str, bytes],
    *,
    client: httpx.Client | None = None,
) -> MetricsProvider:
    """Build the provider named by ``provider.type``."""
    provider_cls = PROVIDERS.get(provider.type)
    if provider_cls is None:
        raise UnknownProviderError(provider.type, list(PROVIDERS))
    return provider_cls.from_template(metric_interval, provider, credentials, client=client)


__all__ = [
    "PROVIDERS",
    "DatadogProvider",
    "MetricsProvider",
    "create_provider",
]
