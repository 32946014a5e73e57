"""Project-level non-DRF views.

This module contains the root landing endpoint used for quick service checks.
"""

from __future__ import annotations

from django.http import HttpRequest, HttpResponse


def home(request: HttpRequest) -> HttpResponse:
    """Return a plain-text greeting."""
    return HttpResponse(
        "hello, this is weather api",
        content_type="text/plain; charset=utf-8",
    )
