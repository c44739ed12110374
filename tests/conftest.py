"""Pytest configuration and fixtures for the canary metrics tests."""

from collections.abc import Callable

import httpx
import pytest

from canary_metrics.config import DatadogSettings
from canary_metrics.models import MetricTemplateProvider

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def credentials() -> dict[str, bytes]:
    """Datadog credentials as loaded from a secret."""
    return {
        "datadog_api_key": b"api-key",
        "datadog_application_key": b"app-key",
    }


@pytest.fixture
def settings() -> DatadogSettings:
    return DatadogSettings(default_host="https://api.datadoghq.com", timeout_sec=5.0)


@pytest.fixture
def template() -> MetricTemplateProvider:
    return MetricTemplateProvider(type="datadog", address="https://dd.example.com")


class RecordingBackend:
    """Fake Datadog backend that records every request it receives."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def backend() -> Callable[[Handler], RecordingBackend]:
    """Factory for a recording fake backend around a request handler."""
    return RecordingBackend
