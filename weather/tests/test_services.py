from __future__ import annotations

# ruff: noqa: S101
import asyncio
import logging
import time

import httpx
import pytest

from weather import services
from weather.engines.apixu import ApixuProvider
from weather.engines.base import WeatherProvider
from weather.engines.openweathermap import OpenWeatherMapProvider
from weather.engines.types import Kelvin, ProviderName, TemperatureReport
from weather.exceptions import (
    AggregationTimeoutError,
    NoProvidersError,
    ProviderError,
    ProviderFailedError,
    ProviderProtocolError,
    ProviderTransportError,
)
from weather.metrics import (
    weather_aggregations_total,
    weather_provider_errors_total,
    weather_provider_requests_total,
)
from weather.services import average_temperature, get_average_temperature


class FakeProvider(WeatherProvider):
    def __init__(
        self,
        name: ProviderName,
        kelvin: Kelvin = 0.0,
        *,
        error: ProviderError | None = None,
        delay: float = 0.0,
    ) -> None:
        self.name = name
        self.kelvin = kelvin
        self.error = error
        self.delay = delay
        self.calls: list[str] = []
        self.cancelled = False

    async def temperature(self, city: str) -> Kelvin:
        self.calls.append(city)
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return self.kelvin


def test_average_of_two_providers() -> None:
    providers = [
        FakeProvider("openweathermap", 300.0),
        FakeProvider("apixu", 280.0),
    ]

    result = asyncio.run(average_temperature("Paris", providers))

    assert result == pytest.approx(290.0)
    assert [p.calls for p in providers] == [["Paris"], ["Paris"]]


def test_average_ignores_completion_order() -> None:
    providers = [
        FakeProvider("openweathermap", 300.0, delay=0.05),
        FakeProvider("apixu", 280.0),
        FakeProvider("tomorrow", 250.0, delay=0.02),
    ]

    result = asyncio.run(average_temperature("Paris", providers))

    assert result == pytest.approx((300.0 + 280.0 + 250.0) / 3)


def test_single_provider_returns_its_reading() -> None:
    result = asyncio.run(
        average_temperature("Lima", [FakeProvider("tomorrow", 291.4)])
    )
    assert result == pytest.approx(291.4)


def test_average_logs_mean(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="weather")
    providers = [
        FakeProvider("openweathermap", 300.0),
        FakeProvider("apixu", 281.0),
    ]

    asyncio.run(average_temperature("Paris", providers))

    assert "weather.average city=Paris temperature=290.50" in caplog.messages


def test_empty_provider_set_fails_without_lookups(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="weather")

    with pytest.raises(NoProvidersError) as excinfo:
        asyncio.run(average_temperature("Paris", []))

    assert str(excinfo.value) == "no providers available"
    records = [
        r for r in caplog.records if r.getMessage().startswith("weather.")
    ]
    assert records[-1].getMessage() == (
        "weather.average.no_providers city=Paris"
    )
    assert records[-1].levelno == logging.INFO


def test_provider_failure_fails_the_aggregation() -> None:
    failure = ProviderTransportError("connection refused", provider="apixu")
    providers = [
        FakeProvider("openweathermap", 290.0),
        FakeProvider("apixu", error=failure),
    ]

    with pytest.raises(ProviderFailedError) as excinfo:
        asyncio.run(average_temperature("Paris", providers))

    assert str(excinfo.value) == "connection refused"
    assert excinfo.value.provider == "apixu"
    assert excinfo.value.provider_error is failure
    assert excinfo.value.__cause__ is failure


def test_first_failure_does_not_wait_for_slow_providers() -> None:
    slow = FakeProvider("openweathermap", 290.0, delay=5.0)
    failing = FakeProvider(
        "apixu",
        error=ProviderProtocolError("401:Invalid API key", provider="apixu"),
    )

    async def scenario() -> None:
        started = time.perf_counter()
        with pytest.raises(ProviderFailedError) as excinfo:
            await average_temperature("Paris", [slow, failing], timeout=10)
        assert time.perf_counter() - started < 1.0
        assert str(excinfo.value) == "401:Invalid API key"
        await asyncio.sleep(0)
        assert slow.cancelled is True

    asyncio.run(scenario())


def test_slow_provider_times_out_the_aggregation() -> None:
    fast = FakeProvider("openweathermap", 300.0)
    slow = FakeProvider("apixu", 280.0, delay=1.0)

    async def scenario() -> None:
        with pytest.raises(AggregationTimeoutError) as excinfo:
            await average_temperature("Paris", [fast, slow], timeout=0.05)
        assert str(excinfo.value) == "timed out"
        await asyncio.sleep(0)
        assert slow.cancelled is True
        assert fast.cancelled is False

    asyncio.run(scenario())


def test_default_deadline_comes_from_settings(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(services, "AGGREGATION_TIMEOUT_SECONDS", 0.05)
    providers = [FakeProvider("tomorrow", 280.0, delay=1.0)]

    with pytest.raises(AggregationTimeoutError):
        asyncio.run(average_temperature("Paris", providers))


def test_get_average_temperature_builds_report(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    providers = (
        FakeProvider("openweathermap", 300.0),
        FakeProvider("apixu", 280.0),
    )
    monkeypatch.setattr(services, "PROVIDER_SET", providers)

    report = asyncio.run(get_average_temperature("Paris,TX,US"))

    assert isinstance(report, TemperatureReport)
    assert report.city == "Paris,TX,US"
    assert report.temperature == pytest.approx(290.0)
    assert report.took.endswith("s")
    assert providers[0].calls == ["Paris,TX,US"]


def test_get_average_temperature_with_real_engines() -> None:
    def owm(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"main": {"temp": 300.0}})

    def apixu(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"current": {"temp_c": 6.85}})

    providers = (
        OpenWeatherMapProvider("k1", transport=httpx.MockTransport(owm)),
        ApixuProvider("k2", transport=httpx.MockTransport(apixu)),
    )

    report = asyncio.run(get_average_temperature("Paris", providers))

    assert report.temperature == pytest.approx(290.0)


def test_metrics_record_success() -> None:
    ok_counter = weather_aggregations_total.labels(outcome="ok")
    request_counter = weather_provider_requests_total.labels(
        provider="tomorrow"
    )
    ok_before = ok_counter._value.get()
    requests_before = request_counter._value.get()

    asyncio.run(
        get_average_temperature("Paris", (FakeProvider("tomorrow", 280.0),))
    )

    assert ok_counter._value.get() == ok_before + 1
    assert request_counter._value.get() == requests_before + 1


def test_metrics_record_failures() -> None:
    outcome_counter = weather_aggregations_total.labels(
        outcome="provider_error"
    )
    error_counter = weather_provider_errors_total.labels(
        provider="apixu", error_type="ProviderTransportError"
    )
    empty_counter = weather_aggregations_total.labels(outcome="no_providers")
    outcome_before = outcome_counter._value.get()
    error_before = error_counter._value.get()
    empty_before = empty_counter._value.get()

    failing = FakeProvider(
        "apixu",
        error=ProviderTransportError("connection refused", provider="apixu"),
    )
    with pytest.raises(ProviderFailedError):
        asyncio.run(get_average_temperature("Paris", (failing,)))
    with pytest.raises(NoProvidersError):
        asyncio.run(get_average_temperature("Paris", ()))

    assert outcome_counter._value.get() == outcome_before + 1
    assert error_counter._value.get() == error_before + 1
    assert empty_counter._value.get() == empty_before + 1
