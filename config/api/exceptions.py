from __future__ import annotations

import logging
from typing import Any

from django.http import HttpResponse
from django.http.response import HttpResponseBase

from weather.exceptions import AggregationError

logger = logging.getLogger(__name__)

PLAIN_TEXT = "text/plain; charset=utf-8"


def custom_exception_handler(
    exc: Exception,
    context: dict[str, Any],
) -> HttpResponseBase:
    # Lazy imports: safe even if settings aren't configured at import time.
    from rest_framework import status
    from rest_framework.views import exception_handler as drf_exception_handler

    if isinstance(exc, AggregationError):
        return HttpResponse(
            exc.message,
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content_type=PLAIN_TEXT,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        logger.error(
            "api.unhandled_exception err=%s",
            exc,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return HttpResponse(
            "internal server error",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content_type=PLAIN_TEXT,
        )
    return response
