"""
Prometheus metric definitions.

All metrics prefixed with requestid_ to avoid naming collisions.
"""

from prometheus_client import Counter

# --- Resolution ---
IDS_RESOLVED = Counter(
    "requestid_resolved_total",
    "Identifiers resolved per request",
    ["origin"],
)

EMPTY_IDS = Counter(
    "requestid_empty_total",
    "Requests that ended up with an empty identifier",
)

# --- Absorbed failures ---
STRATEGY_ERRORS = Counter(
    "requestid_strategy_errors_total",
    "Strategy calls that raised and were absorbed",
    ["strategy"],
)
