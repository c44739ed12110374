"""Unit tests for provider lookup and the provider protocol."""

from __future__ import annotations

import httpx
import pytest

from canary_metrics import create_provider
from canary_metrics.errors import MissingCredentialError, UnknownProviderError
from canary_metrics.models import MetricTemplateProvider
from canary_metrics.providers import MetricsProvider
from canary_metrics.providers.datadog import DatadogProvider


class TestCreateProvider:
    def test_datadog_provider(self, template, credentials):
        provider = create_provider("1m", template, credentials)
        assert isinstance(provider, DatadogProvider)
        assert isinstance(provider, MetricsProvider)
        assert provider.config.lookback_seconds == 600

    def test_unknown_type_lists_available(self, credentials):
        with pytest.raises(UnknownProviderError) as exc_info:
            create_provider("1m", MetricTemplateProvider(type="graphite"), credentials)
        assert "graphite" in str(exc_info.value)
        assert "datadog" in str(exc_info.value)

    def test_construction_errors_propagate(self, template):
        with pytest.raises(MissingCredentialError):
            create_provider("1m", template, {"datadog_api_key": b"k"})

    def test_construction_errors_are_value_errors(self, template):
        with pytest.raises(ValueError):
            create_provider("1m", template, {})

    def test_shared_client_used(self, backend, template, credentials):
        fake = backend(lambda request: httpx.Response(200, json={"valid": True}))
        with fake.client() as client:
            provider = create_provider("1m", template, credentials, client=client)
            assert provider.is_online() is True
            assert provider.is_online() is True
            assert not client.is_closed
        assert len(fake.requests) == 2


class TestMetricTemplateProvider:
    def test_fields_are_type_and_address(self):
        assert set(MetricTemplateProvider.model_fields) == {"type", "address"}

    def test_address_defaults_empty(self):
        assert MetricTemplateProvider(type="datadog").address == ""
