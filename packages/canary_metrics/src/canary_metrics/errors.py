"""Error taxonomy for metric providers.

Construction errors mean no usable provider was produced. Call errors are
always returned to the caller; retry and backoff belong to the controller.
"""

from __future__ import annotations


class MetricsProviderError(Exception):
    """Base class for every error raised by a metric provider."""


class MissingCredentialError(MetricsProviderError, ValueError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"credentials do not contain '{key}'")


class InvalidIntervalError(MetricsProviderError, ValueError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"error parsing metric interval '{value}'")


class UnknownProviderError(MetricsProviderError, ValueError):
    def __init__(self, provider_type: str, available: list[str]) -> None:
        self.provider_type = provider_type
        super().__init__(
            f"Unknown provider type '{provider_type}'. Available: {', '.join(available)}"
        )


class NetworkError(MetricsProviderError):
    """Transport failure or timeout while sending the request."""


class ReadError(MetricsProviderError):
    """I/O failure while draining the response body."""


class BackendError(MetricsProviderError):
    """The backend answered with a non-200 status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"error response {status_code}: {body}")


class DecodeError(MetricsProviderError):
    def __init__(self, body: str) -> None:
        self.body = body
        super().__init__(f"error decoding result: '{body}'")


class NoValuesFoundError(MetricsProviderError):
    def __init__(self, body: str) -> None:
        self.body = body
        super().__init__(f"no values found in response: {body}")
