"""
Econ Dashboard — TTL Configuration
───────────────────────────────────
Single source of truth for all cache durations.
Organised by upstream resource, fastest-changing first.
"""

# ── Per resource TTL (seconds) ────────────────────────────────

TTL = {
    # Fast-changing
    "quote":          60,           # 1 minute  (Yahoo chart)

    # Medium-changing
    "fred_series":    5 * 60,       # 5 minutes (FRED observations)
    "fred_release":   5 * 60,       # 5 minutes (series info + latest obs)

    # Slow-changing
    "fred_releases":  30 * 60,      # 30 minutes (FRED releases/dates)
    "calendar":       60 * 60,      # 1 hour     (computed calendar)
}

# ── Degraded (restricted network) mode ───────────────────────
# Every new entry is held for a day while degraded.
DEGRADED_TTL = 24 * 3600


def ttl_for(resource: str, degraded: bool = False) -> int:
    if degraded:
        return DEGRADED_TTL
    return TTL[resource]
