from __future__ import annotations

from typing import cast

import httpx
from django.conf import settings

from .base import WeatherProvider
from .client import (
    decode_error_envelope,
    decode_json,
    dig,
    fetch,
    log_reading,
    require_number,
    status_error,
)
from .types import Kelvin, ProviderName, celsius_to_kelvin


class TomorrowProvider(WeatherProvider):
    """Tomorrow.io realtime weather (`/v4/weather/realtime`).

    The city goes into the `location` parameter and metric units are
    requested, so readings arrive in Celsius.
    """

    name: ProviderName = "tomorrow"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url: str = base_url or cast(
            str,
            getattr(
                settings,
                "TOMORROW_BASE_URL",
                "https://api.tomorrow.io/v4/weather/realtime",
            ),
        )
        self.timeout = float(
            timeout
            if timeout is not None
            else getattr(settings, "WEATHER_PROVIDER_TIMEOUT_SECONDS", 10.0)
        )
        self.transport = transport

    async def temperature(self, city: str) -> Kelvin:
        response = await fetch(
            self.base_url,
            {"apikey": self.api_key, "location": city, "units": "metric"},
            provider=self.name,
            timeout=self.timeout,
            transport=self.transport,
        )
        if response.status_code != httpx.codes.OK:
            envelope = decode_error_envelope(response)
            raise status_error(
                envelope.get("code"),
                envelope.get("message"),
                provider=self.name,
            )

        payload = decode_json(response, provider=self.name)
        celsius = require_number(
            dig(payload, "data", "values", "temperature"),
            "data.values.temperature",
            provider=self.name,
        )
        kelvin = celsius_to_kelvin(celsius)
        log_reading(self.name, city, kelvin)
        return kelvin
