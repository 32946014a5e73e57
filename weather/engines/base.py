from __future__ import annotations

from abc import ABC, abstractmethod

from .types import Kelvin, ProviderName


class WeatherProvider(ABC):
    """Abstract base for weather providers."""

    name: ProviderName

    @abstractmethod
    async def temperature(self, city: str) -> Kelvin:
        """Return the current temperature for a city in Kelvin.

        Raises `weather.exceptions.ProviderError` on any failure.
        """
