from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import cast

from django.conf import settings

from .apixu import ApixuProvider
from .base import WeatherProvider
from .openweathermap import OpenWeatherMapProvider
from .tomorrow import TomorrowProvider
from .types import ProviderName

ProviderSet = tuple[WeatherProvider, ...]

_FACTORIES: dict[ProviderName, Callable[[str], WeatherProvider]] = {
    "openweathermap": OpenWeatherMapProvider,
    "apixu": ApixuProvider,
    "tomorrow": TomorrowProvider,
}

_API_KEY_SETTINGS: dict[ProviderName, str] = {
    "openweathermap": "OPENWEATHERMAP_API_KEY",
    "apixu": "APIXU_API_KEY",
    "tomorrow": "TOMORROW_API_KEY",
}


def configured_provider_names() -> list[ProviderName]:
    configured = getattr(
        settings, "WEATHER_PROVIDERS", list(_FACTORIES)
    )
    if isinstance(configured, str):
        configured = configured.split(",")
    return validate_provider_names(configured)


def validate_provider_names(names: Iterable[str]) -> list[ProviderName]:
    validated: list[ProviderName] = []
    for raw in names:
        name = raw.strip().lower()
        if not name:
            continue
        if name not in _FACTORIES:
            raise ValueError(f"Unsupported weather provider: {name}")
        validated.append(cast(ProviderName, name))
    return validated


def build_provider_set(
    names: Iterable[str] | None = None,
) -> ProviderSet:
    """Instantiate the configured providers, in configuration order."""

    selected = (
        validate_provider_names(names)
        if names is not None
        else configured_provider_names()
    )
    return tuple(
        _FACTORIES[name](str(getattr(settings, _API_KEY_SETTINGS[name], "")))
        for name in selected
    )
