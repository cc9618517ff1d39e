"""Prometheus metrics for monitoring metric computations and request latency"""

from prometheus_client import Counter, Histogram

computation_counter = Counter(
    "finmetrics_computation_total",
    "Derived metric computations",
    ["metric", "outcome"],  # outcome: ok | insufficient_data | invalid_input | does_not_converge
)

payoff_months_histogram = Histogram(
    "finmetrics_payoff_months",
    "Simulated months until debt free",
    buckets=[6, 12, 24, 36, 60, 120, 240, 360, 600, 1200],
)

diversification_insight_counter = Counter(
    "finmetrics_diversification_insight_total",
    "Diversification scores by insight band",
    ["insight"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_computation(metric: str, outcome: str = "ok") -> None:
    computation_counter.labels(metric=metric, outcome=outcome).inc()


def record_payoff(months: int) -> None:
    """Record a converged payoff plan"""
    record_computation("payoff")
    payoff_months_histogram.observe(months)


def record_diversification(insight: str, insufficient_data: bool) -> None:
    record_computation("diversification", "insufficient_data" if insufficient_data else "ok")
    diversification_insight_counter.labels(insight=insight).inc()
