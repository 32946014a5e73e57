from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

ProviderName = Literal["openweathermap", "apixu", "tomorrow"]

Kelvin: TypeAlias = float

CELSIUS_TO_KELVIN_OFFSET = 273.15


def celsius_to_kelvin(value: float) -> Kelvin:
    return value + CELSIUS_TO_KELVIN_OFFSET


@dataclass(frozen=True)
class TemperatureReport:
    city: str
    temperature: Kelvin
    took: str
