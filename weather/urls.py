from __future__ import annotations

from django.urls import path

from .views import WeatherTemperatureView

urlpatterns = [
    path(
        "weather/<path:city>",
        WeatherTemperatureView.as_view(),
        name="weather-temperature",
    ),
]
