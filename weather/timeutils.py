from __future__ import annotations

_UNITS: tuple[tuple[float, str], ...] = (
    (1.0, "s"),
    (1e-3, "ms"),
    (1e-6, "µs"),
)


def _trim(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


def format_duration(seconds: float) -> str:
    """Return a short human-readable duration such as `1.204s` or `87.5ms`."""

    if seconds < 0:
        return "-" + format_duration(-seconds)
    if seconds == 0:
        return "0s"
    if seconds >= 3600:
        hours, rest = divmod(seconds, 3600)
        minutes, secs = divmod(rest, 60)
        return f"{int(hours)}h{int(minutes)}m{_trim(secs)}s"
    if seconds >= 60:
        minutes, secs = divmod(seconds, 60)
        return f"{int(minutes)}m{_trim(secs)}s"
    for scale, suffix in _UNITS:
        if seconds >= scale:
            return f"{_trim(seconds / scale)}{suffix}"
    return f"{int(round(seconds * 1e9))}ns"
