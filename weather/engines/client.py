"""HTTP plumbing shared by the provider engines.

Each engine owns its endpoint and response schema; these helpers only cover
the request itself and the failure modes every provider has in common.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..exceptions import ProviderProtocolError, ProviderTransportError
from .types import Kelvin

logger = logging.getLogger(__name__)


async def fetch(
    url: str,
    params: Mapping[str, str],
    *,
    provider: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """Issue a single GET and return the fully read response.

    The client (and with it the connection) is closed before returning, on
    success and on failure alike.
    """

    try:
        async with httpx.AsyncClient(
            timeout=timeout, transport=transport
        ) as client:
            return await client.get(url, params=dict(params))
    except httpx.HTTPError as exc:
        raise ProviderTransportError(
            str(exc) or exc.__class__.__name__, provider=provider
        ) from exc


def decode_json(response: httpx.Response, *, provider: str) -> Any:
    """Decode a success body, turning decode errors into protocol errors."""

    try:
        return response.json()
    except ValueError as exc:
        raise ProviderProtocolError(str(exc), provider=provider) from exc


def decode_error_envelope(response: httpx.Response) -> dict[str, Any]:
    """Best-effort decode of an error body; unreadable bodies become `{}`."""

    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def status_error(
    code: Any, message: Any, *, provider: str
) -> ProviderProtocolError:
    """Build the `"<code>:<message>"` error for a non-200 answer."""

    return ProviderProtocolError(
        f"{_coerce_code(code)}:{message if isinstance(message, str) else ''}",
        provider=provider,
    )


def dig(payload: Any, *keys: str) -> Any:
    current = payload
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def require_number(value: Any, field: str, *, provider: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ProviderProtocolError(
            f"missing or invalid {field} in response", provider=provider
        )
    return float(value)


def log_reading(provider: str, city: str, kelvin: Kelvin) -> None:
    logger.info(
        "weather.provider.ok provider=%s city=%s temperature=%.2f",
        provider,
        city,
        kelvin,
    )


def _coerce_code(raw: Any) -> int:
    # Envelopes are parsed leniently: anything that is not an integer code
    # becomes 0.
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return 0
    return 0
