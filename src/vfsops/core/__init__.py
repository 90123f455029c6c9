"""Core module - configuration and schemas."""

from __future__ import annotations

from vfsops.core.config import load_config, merge_overrides
from vfsops.core.constants import (
    BUCKET_STATS,
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_KSTAT_GROUP,
    HEADER_EVERY,
    HEADER_LABELS,
    ROW_FORMAT,
)
from vfsops.core.schemas import LogLevel, MonitorConfig, OutputStream, SortOrder

__all__ = [
    "BUCKET_STATS",
    "DEFAULT_INTERVAL_SECONDS",
    "DEFAULT_KSTAT_GROUP",
    "HEADER_EVERY",
    "HEADER_LABELS",
    "load_config",
    "LogLevel",
    "merge_overrides",
    "MonitorConfig",
    "OutputStream",
    "ROW_FORMAT",
    "SortOrder",
]
