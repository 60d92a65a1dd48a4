"""
Metrics definitions for FireGuard.

This module defines Prometheus metrics for the status ingress,
fire event correlation and realtime broadcast paths.
"""

from prometheus_client import Counter, Gauge

# 카운터 메트릭
status_updates = Counter(
    "fireguard_status_updates_total",
    "Accepted sensor status updates",
    ["status"]
)

status_rejected = Counter(
    "fireguard_status_rejected_total",
    "Sensor status updates rejected as invalid"
)

fire_events_created = Counter(
    "fireguard_fire_events_created_total",
    "Fire events written to the durable store",
    ["source"]
)

location_reports = Counter(
    "fireguard_location_reports_total",
    "Location reports by correlation outcome",
    ["outcome"]
)

broadcast_messages = Counter(
    "fireguard_broadcast_messages_total",
    "Messages published on the broadcast hub",
    ["channel"]
)

broadcast_dropped = Counter(
    "fireguard_broadcast_dropped_total",
    "Messages dropped for a slow subscriber",
    ["channel"]
)

sink_failures = Counter(
    "fireguard_sink_failures_total",
    "Broadcast sink deliveries that raised"
)

request_errors = Counter(
    "fireguard_request_errors_total",
    "Requests answered with a structured error",
    ["kind"]
)

# 게이지 메트릭
realtime_subscribers = Gauge(
    "fireguard_realtime_subscribers",
    "Currently connected realtime subscribers"
)

current_status = Gauge(
    "fireguard_current_status",
    "Current cached status (1 = FIRE, 0 = SAFE)"
)
