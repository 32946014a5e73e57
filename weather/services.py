from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence

from django.conf import settings

from .engines.base import WeatherProvider
from .engines.registry import ProviderSet, build_provider_set
from .engines.types import Kelvin, TemperatureReport
from .exceptions import (
    AggregationError,
    AggregationTimeoutError,
    NoProvidersError,
    ProviderError,
    ProviderFailedError,
)
from .metrics import (
    weather_aggregation_latency_seconds,
    weather_aggregations_total,
    weather_provider_errors_total,
    weather_provider_latency_seconds,
    weather_provider_requests_total,
)
from .timeutils import format_duration

logger = logging.getLogger(__name__)

AGGREGATION_TIMEOUT_SECONDS = float(
    getattr(settings, "WEATHER_AGGREGATION_TIMEOUT_SECONDS", 10.0)
)

PROVIDER_SET: ProviderSet = build_provider_set()


async def _lookup(
    provider: WeatherProvider, city: str
) -> Kelvin | ProviderError:
    """Run one provider lookup and report its outcome as a value.

    Provider failures are returned rather than raised so a task whose result
    is never collected does not leave an unretrieved exception behind.
    """

    start_time = time.perf_counter()
    weather_provider_requests_total.labels(provider=provider.name).inc()
    try:
        return await provider.temperature(city)
    except ProviderError as exc:
        weather_provider_errors_total.labels(
            provider=provider.name,
            error_type=exc.__class__.__name__,
        ).inc()
        logger.warning(
            "weather.provider.failed provider=%s city=%s err=%s",
            provider.name,
            city,
            exc,
        )
        return exc
    finally:
        duration = time.perf_counter() - start_time
        weather_provider_latency_seconds.labels(
            provider=provider.name
        ).observe(duration)


async def average_temperature(
    city: str,
    providers: Sequence[WeatherProvider],
    *,
    timeout: float | None = None,
) -> Kelvin:
    """Query every provider concurrently and return the mean in Kelvin.

    The first provider failure aborts the aggregation, as does running past
    the global deadline; no partial average is ever produced. Lookups still
    in flight at that point are cancelled.
    """

    if not providers:
        logger.info("weather.average.no_providers city=%s", city)
        raise NoProvidersError()

    deadline = AGGREGATION_TIMEOUT_SECONDS if timeout is None else timeout
    tasks = [
        asyncio.create_task(_lookup(provider, city)) for provider in providers
    ]
    total = 0.0
    try:
        for next_outcome in asyncio.as_completed(tasks, timeout=deadline):
            outcome = await next_outcome
            if isinstance(outcome, ProviderError):
                raise ProviderFailedError(outcome) from outcome
            total += outcome
    except TimeoutError as exc:
        logger.warning(
            "weather.average.timeout city=%s timeout=%ss", city, deadline
        )
        raise AggregationTimeoutError() from exc
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()

    mean = total / len(providers)
    logger.info("weather.average city=%s temperature=%.2f", city, mean)
    return mean


async def get_average_temperature(
    city: str,
    providers: ProviderSet | None = None,
) -> TemperatureReport:
    """Aggregate over the configured providers and time the whole request."""

    selected = PROVIDER_SET if providers is None else providers
    start_time = time.perf_counter()
    try:
        temperature = await average_temperature(city, selected)
    except AggregationError as exc:
        weather_aggregations_total.labels(outcome=exc.outcome).inc()
        raise
    finally:
        weather_aggregation_latency_seconds.observe(
            time.perf_counter() - start_time
        )

    weather_aggregations_total.labels(outcome="ok").inc()
    return TemperatureReport(
        city=city,
        temperature=temperature,
        took=format_duration(time.perf_counter() - start_time),
    )
