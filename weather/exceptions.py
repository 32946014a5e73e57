"""Failures raised by provider lookups and temperature aggregation."""

from __future__ import annotations


class ProviderError(Exception):
    """Raised when a single provider lookup fails."""

    def __init__(self, message: str, *, provider: str) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider


class ProviderTransportError(ProviderError):
    """The provider could not be reached (connection, DNS, timeout)."""


class ProviderProtocolError(ProviderError):
    """The provider answered with an error status or an unreadable body."""


class AggregationError(Exception):
    """Raised when an average temperature cannot be produced."""

    default_message = "aggregation failed"
    outcome = "error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NoProvidersError(AggregationError):
    default_message = "no providers available"
    outcome = "no_providers"


class AggregationTimeoutError(AggregationError):
    default_message = "timed out"
    outcome = "timeout"


class ProviderFailedError(AggregationError):
    """Wraps the first provider failure seen during an aggregation."""

    outcome = "provider_error"

    def __init__(self, error: ProviderError) -> None:
        super().__init__(error.message)
        self.provider_error = error
        self.provider = error.provider
