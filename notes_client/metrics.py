"""Prometheus metrics for the notes client.

All metric objects are defined here so they can be imported from any module.
"""

import logging

from prometheus_client import Counter, Gauge, Histogram, start_http_server

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Remote API metrics
# ---------------------------------------------------------------------------

NOTES_API_REQUESTS = Counter(
    "notes_api_requests_total",
    "Total requests sent to the remote notes API",
    ["operation", "status"],  # status: HTTP code or "error"
)

NOTES_API_DURATION = Histogram(
    "notes_api_request_duration_seconds",
    "Duration of remote notes API requests in seconds",
    ["operation"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# ---------------------------------------------------------------------------
# Local mirror metrics
# ---------------------------------------------------------------------------

STALE_RESPONSES = Counter(
    "notes_stale_responses_total",
    "Refresh responses discarded because a newer refresh was issued",
)

CACHED_NOTES = Gauge(
    "notes_cached",
    "Number of notes held in the local mirror",
)

# ---------------------------------------------------------------------------
# Reminder metrics
# ---------------------------------------------------------------------------

REMINDER_EVENTS = Counter(
    "notes_reminder_events_total",
    "Reminder lifecycle events",
    ["event"],  # scheduled, skipped, fired, cancelled
)

# ---------------------------------------------------------------------------
# Exposition
# ---------------------------------------------------------------------------


def start_metrics_server(port: int) -> bool:
    """Serve the default registry on `port`. Returns False when disabled."""
    if port <= 0:
        logger.info("Metrics server disabled")
        return False
    start_http_server(port)
    logger.info("Metrics server listening on :%d", port)
    return True
