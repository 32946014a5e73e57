"""Average temperature endpoint.

Authentication: none.
Responses: bare JSON on success; aggregation failures are turned into a
plain-text 500 by `config.api.exceptions.custom_exception_handler`.
"""

from __future__ import annotations

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiResponse, OpenApiTypes, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import TemperatureReportSerializer, serialize_report
from .services import get_average_temperature


class WeatherTemperatureView(APIView):
    """Average the current temperature of a city across all providers.

    Auth: none.
    Response: `{"city", "temperature", "took"}` with the temperature in Kelvin.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        responses={
            200: TemperatureReportSerializer,
            500: OpenApiResponse(
                response=OpenApiTypes.STR,
                description="Aggregation failure message (text/plain).",
            ),
        },
    )
    def get(self, request: Request, city: str) -> Response:
        """Return the mean temperature for `city`.

        The city is taken verbatim from the rest of the path and forwarded
        unchanged to every provider.
        """

        report = async_to_sync(get_average_temperature)(city)
        return Response(serialize_report(report))
