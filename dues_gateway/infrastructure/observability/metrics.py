"""Prometheus metrics for monitoring member arrears and configuration changes"""

from prometheus_client import Counter, Histogram

# Debt report metrics
debt_report_counter = Counter(
    "dues_debt_report_total",
    "Total debt reports computed",
    ["band"],  # current | in_arrears | non_contributor
)

sub_periods_owed_histogram = Histogram(
    "dues_sub_periods_owed",
    "Closed sub-periods owed per debt report",
    buckets=[0, 1, 2, 3, 6, 12, 24, 48],
)

strict_date_rejections_counter = Counter(
    "dues_strict_date_rejections_total",
    "Debt requests rejected for an unreadable join date in strict mode",
)

# Configuration metrics
config_update_counter = Counter(
    "dues_billing_config_updates_total",
    "Billing configuration updates applied",
    ["action"],  # apply | reset
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_debt_report(band: str, sub_periods_owed: int) -> None:
    """Record debt metrics for monitoring arrears distribution"""
    debt_report_counter.labels(band=band).inc()
    sub_periods_owed_histogram.observe(sub_periods_owed)
