from __future__ import annotations

from prometheus_client import Counter, Histogram

weather_provider_requests_total = Counter(
    "weather_provider_requests_total",
    "Total weather provider requests",
    labelnames=["provider"],
)

weather_provider_errors_total = Counter(
    "weather_provider_errors_total",
    "Total weather provider request errors",
    labelnames=["provider", "error_type"],
)

weather_provider_latency_seconds = Histogram(
    "weather_provider_latency_seconds",
    "Latency of weather provider requests",
    labelnames=["provider"],
    buckets=(0.1, 0.3, 0.5, 1, 2, 5, 10, 20, 30),
)

weather_aggregations_total = Counter(
    "weather_aggregations_total",
    "Average temperature aggregations by outcome",
    labelnames=["outcome"],
)

weather_aggregation_latency_seconds = Histogram(
    "weather_aggregation_latency_seconds",
    "Latency of average temperature aggregations",
    buckets=(0.1, 0.3, 0.5, 1, 2, 5, 10, 20, 30),
)
