"""Shared constants for vfsops.

Centralized constants to avoid duplication and ensure consistency across modules.
"""

from __future__ import annotations

# kstat module holding the per-zone VFS latency counters
DEFAULT_KSTAT_GROUP = "zone_vfs"

# Statistic carrying the full (untruncated) zone name
ZONENAME_STAT = "zonename"

# Bucket field -> kstat statistic name, in column order
BUCKET_STATS: dict[str, str] = {
    "ten_ms": "10ms_ops",
    "one_hundred_ms": "100ms_ops",
    "one_second": "1s_ops",
    "ten_second": "10s_ops",
}

# Fixed-width table layout. Monitoring scripts parse this text, so the
# widths must not change.
ZONE_COLUMN_WIDTH = 8
COUNTER_COLUMN_WIDTH = 10
ROW_FORMAT = "{:>8} {:>10} {:>10} {:>10} {:>10}"
HEADER_LABELS = ("zone", "10ms_ops", "100ms_ops", "1s_ops", "10s_ops")

# Header is re-emitted after this many polls
HEADER_EVERY = 6

# Interval used when none is configured (the fixed-interval mode)
DEFAULT_INTERVAL_SECONDS = 5
