"""Datadog metric provider.

Runs a metrics query over a lookback window and reduces the response to the
single scalar the canary controller compares against its thresholds.

API reference: https://docs.datadoghq.com/api/
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

import httpx
from pydantic import ValidationError
from whenever import Instant

from canary_metrics.config import DatadogSettings
from canary_metrics.durations import parse_duration
from canary_metrics.errors import (
    BackendError,
    DecodeError,
    InvalidIntervalError,
    MissingCredentialError,
    NetworkError,
    NoValuesFoundError,
    ReadError,
)
from canary_metrics.models import (
    DatadogProviderConfig,
    QUERY_RESPONSE_ADAPTER,
    MetricTemplateProvider,
)

logger = logging.getLogger("canary_metrics.datadog")

METRICS_QUERY_PATH = "/api/v1/query"
API_KEY_VALIDATION_PATH = "/api/v1/validate"

API_KEY_SECRET_KEY = "datadog_api_key"
API_KEY_HEADER = "DD-API-KEY"

APPLICATION_KEY_SECRET_KEY = "datadog_application_key"
APPLICATION_KEY_HEADER = "DD-APPLICATION-KEY"

# The query window spans this many metric intervals so that its oldest
# bucket is complete by the time it is read.
LOOKBACK_MULTIPLIER = 10


def _credential(credentials: Mapping[str, bytes], key: str) -> str:
    if key not in credentials:
        raise MissingCredentialError(key)
    value = credentials[key]
    return value.decode() if isinstance(value, bytes) else str(value)


def _drain(response: httpx.Response, deadline: float) -> bytes:
    chunks: list[bytes] = []
    try:
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if time.monotonic() > deadline:
                raise httpx.ReadTimeout(
                    "response body not received before deadline", request=response.request
                )
    except (httpx.TransportError, httpx.StreamError) as exc:
        raise ReadError(f"error reading body: {exc}") from exc
    return b"".join(chunks)


class DatadogProvider:
    """Executes Datadog queries for one metric template.

    The provider holds only its immutable config, so one instance may be
    shared across threads. Each call opens its own client unless one was
    injected, in which case the caller owns the client's lifecycle.
    """

    def __init__(
        self,
        config: DatadogProviderConfig,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config
        self._client = client

    @property
    def config(self) -> DatadogProviderConfig:
        return self._config

    @classmethod
    def from_template(
        cls,
        metric_interval: str,
        provider: MetricTemplateProvider,
        credentials: Mapping[str, bytes],
        *,
        settings: DatadogSettings | None = None,
        client: httpx.Client | None = None,
    ) -> DatadogProvider:
        """Build a provider from a metric template and its credentials.

        Args:
            metric_interval: Analysis interval, e.g. ``"30s"`` or ``"1m"``.
            provider: Provider block of the metric template.
            credentials: Secret data holding the API and application keys.
            settings: Connection defaults; read from the environment if omitted.
            client: Optional shared HTTP client.

        Raises:
            MissingCredentialError: a required credential key is absent.
            InvalidIntervalError: the interval is not a valid, non-negative duration.
        """
        if settings is None:
            settings = DatadogSettings()

        address = provider.address or settings.default_host
        api_key = _credential(credentials, API_KEY_SECRET_KEY)
        application_key = _credential(credentials, APPLICATION_KEY_SECRET_KEY)

        interval = parse_duration(metric_interval)
        interval_sec = interval.py_timedelta().total_seconds()
        if interval_sec < 0:
            raise InvalidIntervalError(metric_interval)

        config = DatadogProviderConfig(
            query_endpoint=address + METRICS_QUERY_PATH,
            validation_endpoint=address + API_KEY_VALIDATION_PATH,
            api_key=api_key,
            application_key=application_key,
            timeout_sec=settings.timeout_sec,
            lookback_seconds=int(LOOKBACK_MULTIPLIER * interval_sec),
        )
        return cls(config, client=client)

    def _headers(self) -> dict[str, str]:
        return {
            API_KEY_HEADER: self._config.api_key,
            APPLICATION_KEY_HEADER: self._config.application_key,
        }

    @contextmanager
    def _http_client(self) -> Iterator[httpx.Client]:
        if self._client is not None:
            yield self._client
            return
        with httpx.Client() as client:
            yield client

    def _get(self, url: str, params: dict[str, str] | None = None) -> tuple[int, str]:
        """Send one GET and return the status code with the fully drained body.

        ``timeout_sec`` is a single deadline over the whole call. httpx only
        bounds each socket operation, so the deadline is also checked once
        the response headers arrive and after every body chunk.
        """
        timeout = self._config.timeout_sec
        deadline = time.monotonic() + timeout
        with self._http_client() as client:
            try:
                request = client.build_request(
                    "GET",
                    url,
                    params=params,
                    headers=self._headers(),
                    timeout=timeout,
                )
                response = client.send(request, stream=True)
            except (httpx.TransportError, httpx.InvalidURL) as exc:
                raise NetworkError(f"request failed: {exc}") from exc

            try:
                if time.monotonic() > deadline:
                    exc = httpx.ReadTimeout(f"no response within {timeout}s", request=request)
                    raise NetworkError(f"request failed: {exc}") from exc
                body = _drain(response, deadline)
            finally:
                response.close()

        return response.status_code, body.decode(errors="replace")

    def run_query(self, query: str) -> float:
        """Run ``query`` over the lookback window and return the oldest value.

        Only the first point of the first series is read. The newest point
        sits at the end of the window and almost always holds an incomplete
        aggregation bucket.

        Raises:
            NetworkError, ReadError, BackendError, DecodeError, NoValuesFoundError
        """
        now = int(Instant.now().timestamp())
        params = {
            "query": query,
            "from": str(now - self._config.lookback_seconds),
            "to": str(now),
        }
        logger.debug(
            "Datadog query %s from=%s to=%s: %s",
            self._config.query_endpoint,
            params["from"],
            params["to"],
            query,
        )

        status_code, body = self._get(self._config.query_endpoint, params)
        if status_code != httpx.codes.OK:
            logger.warning("Datadog query HTTP %d: %s", status_code, body[:200])
            raise BackendError(status_code, body)

        try:
            result = QUERY_RESPONSE_ADAPTER.validate_json(body)
        except ValidationError as exc:
            raise DecodeError(body) from exc

        # TODO: let the template choose a series once queries may group by tag;
        # today any extra series are silently dropped.
        if result is None or not result.series:
            logger.warning("Datadog query returned no series: %s", query)
            raise NoValuesFoundError(body)
        pointlist = result.series[0].pointlist
        if not pointlist:
            logger.warning("Datadog query returned an empty pointlist: %s", query)
            raise NoValuesFoundError(body)

        point = pointlist[0]
        if len(point) < 2 or point[1] is None:
            raise NoValuesFoundError(body)
        return point[1]

    def is_online(self) -> bool:
        """Check that the backend is reachable and accepts the configured keys.

        Raises:
            NetworkError, ReadError, BackendError
        """
        status_code, body = self._get(self._config.validation_endpoint)
        if status_code != httpx.codes.OK:
            logger.warning("Datadog key validation HTTP %d: %s", status_code, body[:200])
            raise BackendError(status_code, body)
        return True
