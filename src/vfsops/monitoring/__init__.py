"""Monitoring module - per-zone VFS latency sampling.

Pipeline, leaf-first:
- sample_index: decode provider records and key them by instance
- delta: per-interval deltas with regression clamping
- filters: idle-zone suppression and zone-name filtering
- render: fixed-width table output
- scheduler: the polling loop

Providers:
- KstatProvider: ``kstat -p`` on illumos/SmartOS
"""

from __future__ import annotations

from vfsops.monitoring.base import (
    BaseProvider,
    CounterRecord,
    DeltaRow,
    KstatRecord,
    LatencyBuckets,
    MalformedRecordError,
    ProviderError,
)
from vfsops.monitoring.delta import bucket_delta, compute_deltas
from vfsops.monitoring.filters import filter_rows
from vfsops.monitoring.kstat_provider import KstatProvider, parse_kstat_output
from vfsops.monitoring.render import TableRenderer, render_lines, sort_rows
from vfsops.monitoring.sample_index import SampleIndex, build_index, decode_record, index_snapshot
from vfsops.monitoring.scheduler import PollScheduler, SchedulerState

__all__ = [
    "BaseProvider",
    "bucket_delta",
    "build_index",
    "compute_deltas",
    "CounterRecord",
    "decode_record",
    "DeltaRow",
    "filter_rows",
    "index_snapshot",
    "KstatProvider",
    "KstatRecord",
    "LatencyBuckets",
    "MalformedRecordError",
    "parse_kstat_output",
    "PollScheduler",
    "ProviderError",
    "render_lines",
    "SampleIndex",
    "SchedulerState",
    "sort_rows",
    "TableRenderer",
]
