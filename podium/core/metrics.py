"""
Prometheus metrics
"""

from prometheus_client import Counter, Gauge, Histogram

REQUEST_COUNT = Counter('http_requests_total', 'Total HTTP requests', ['method', 'endpoint', 'status'])
REQUEST_DURATION = Histogram('http_request_duration_seconds', 'HTTP request duration', ['method', 'endpoint'])
ACTIVE_CONNECTIONS = Gauge('http_active_connections', 'Number of active HTTP connections')
WAGER_COUNT = Counter('wagers_placed_total', 'Total wager placement attempts', ['kind', 'status'])
ADJUSTMENT_COUNT = Counter('balance_adjustments_total', 'Total admin balance adjustments')
