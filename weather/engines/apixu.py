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


class ApixuProvider(WeatherProvider):
    """Apixu current conditions (`/v1/current.json`).

    Readings are in Celsius and converted to Kelvin. Errors are nested under
    `{"error": {"code": ..., "message": ...}}`.
    """

    name: ProviderName = "apixu"

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
                "APIXU_BASE_URL",
                "https://api.apixu.com/v1/current.json",
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
            {"key": self.api_key, "q": city},
            provider=self.name,
            timeout=self.timeout,
            transport=self.transport,
        )
        if response.status_code != httpx.codes.OK:
            envelope = decode_error_envelope(response)
            raise status_error(
                dig(envelope, "error", "code"),
                dig(envelope, "error", "message"),
                provider=self.name,
            )

        payload = decode_json(response, provider=self.name)
        celsius = require_number(
            dig(payload, "current", "temp_c"),
            "current.temp_c",
            provider=self.name,
        )
        kelvin = celsius_to_kelvin(celsius)
        log_reading(self.name, city, kelvin)
        return kelvin
