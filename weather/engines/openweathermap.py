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
from .types import Kelvin, ProviderName


class OpenWeatherMapProvider(WeatherProvider):
    """OpenWeatherMap implementation.

    Uses the `/data/2.5/weather` endpoint, which reports Kelvin by default.
    Errors come back as `{"cod": ..., "message": ...}`.
    """

    name: ProviderName = "openweathermap"

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
                "OPENWEATHERMAP_BASE_URL",
                "http://api.openweathermap.org/data/2.5/weather",
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
            {"APPID": self.api_key, "q": city},
            provider=self.name,
            timeout=self.timeout,
            transport=self.transport,
        )
        if response.status_code != httpx.codes.OK:
            envelope = decode_error_envelope(response)
            raise status_error(
                envelope.get("cod"),
                envelope.get("message"),
                provider=self.name,
            )

        payload = decode_json(response, provider=self.name)
        kelvin = require_number(
            dig(payload, "main", "temp"), "main.temp", provider=self.name
        )
        log_reading(self.name, city, kelvin)
        return kelvin
