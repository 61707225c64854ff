"""Prometheus metrics for the consultation analyzer.

Defines operational metrics for monitoring the intake pipeline.
"""

from prometheus_client import Counter, Histogram

# Webhook deliveries, by outcome: accepted|rejected|storage_error|downstream_error
recordings_received_total = Counter(
    "consultations_recordings_received_total",
    "Total recordings delivered to the intake webhook",
    ["status"]
)

# Consultations created, by whether the consultant was new or existing
consultations_created_total = Counter(
    "consultations_created_total",
    "Total consultations created",
    ["consultant"]
)

scoring_runs_total = Counter(
    "consultations_scoring_runs_total",
    "Total scorer runs",
    ["scorer", "status"]  # status: succeeded|failed
)

downstream_latency_seconds = Histogram(
    "consultations_downstream_latency_seconds",
    "Latency of the forwarded consultation-creation call",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
)
