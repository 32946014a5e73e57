from __future__ import annotations

from typing import ClassVar

from rest_framework import serializers

from config.api.responses import JSONValue


class TemperatureReportSerializer(serializers.Serializer):
    city: ClassVar[serializers.CharField] = serializers.CharField()
    temperature: ClassVar[serializers.FloatField] = serializers.FloatField(
        help_text="Average temperature in Kelvin."
    )
    took: ClassVar[serializers.CharField] = serializers.CharField(
        help_text="Elapsed aggregation time, e.g. `512.3ms`."
    )


def serialize_report(payload: object) -> dict[str, JSONValue]:
    serializer = TemperatureReportSerializer(payload)
    return dict(serializer.data)
