"""
Prometheus Metrics Module

Counters and timings of meta tag passes, collected with prometheus_client.
"""

from prometheus_client import Counter, Gauge, Histogram

# =============================================================================
# Pass Metrics
# =============================================================================

METATAGS_PASSES_TOTAL = Counter(
    "metatags_passes_total",
    "Total meta tag passes",
    ["outcome"],  # processed, skipped, failed
)

METATAGS_SKIPS_TOTAL = Counter(
    "metatags_skips_total",
    "Total skipped passes by restriction",
    ["reason"],
)

METATAGS_PASS_DURATION_SECONDS = Histogram(
    "metatags_pass_duration_seconds",
    "Meta tag pass duration in seconds",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

# =============================================================================
# Storage Metrics
# =============================================================================

METATAGS_TAG_WRITES_TOTAL = Counter(
    "metatags_tag_writes_total",
    "Total tag rows written",
    ["operation"],  # insert, update
)

# Redis connectivity, set by CacheManager on connect/disconnect
REDIS_CONNECTED = Gauge(
    "metatags_redis_connected",
    "Redis connection status (1 = connected, 0 = disconnected)",
)


def record_pass(outcome: str) -> None:
    METATAGS_PASSES_TOTAL.labels(outcome=outcome).inc()


def record_skip(reason: str) -> None:
    METATAGS_PASSES_TOTAL.labels(outcome="skipped").inc()
    METATAGS_SKIPS_TOTAL.labels(reason=reason).inc()


def record_tag_writes(inserted: int, updated: int) -> None:
    if inserted:
        METATAGS_TAG_WRITES_TOTAL.labels(operation="insert").inc(inserted)
    if updated:
        METATAGS_TAG_WRITES_TOTAL.labels(operation="update").inc(updated)
