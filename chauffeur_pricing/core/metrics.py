"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, CollectorRegistry, generate_latest

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

price_estimates = Counter(
    'price_estimates_total',
    'Total price estimates computed',
    ['vehicle_type', 'round_trip'],
    registry=registry
)

estimate_rejections = Counter(
    'price_estimate_rejections_total',
    'Total price estimate requests rejected by validation',
    registry=registry
)

route_lookups = Counter(
    'route_lookups_total',
    'Total route lookups against the maps provider',
    ['mode', 'outcome'],
    registry=registry
)

route_fallbacks = Counter(
    'route_lookup_fallbacks_total',
    'Total route lookups answered with the fallback route',
    ['reason'],
    registry=registry
)

route_lookup_duration = Histogram(
    'route_lookup_duration_seconds',
    'Route lookup duration in seconds',
    ['mode'],
    registry=registry
)


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    return generate_latest(registry).decode('utf-8')
