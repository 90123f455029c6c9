"""vfsops - per-zone VFS latency outlier monitor."""

from __future__ import annotations

from vfsops.core.schemas import MonitorConfig, OutputStream, SortOrder

__version__ = "0.1.0"

__all__ = [
    "MonitorConfig",
    "OutputStream",
    "SortOrder",
    "__version__",
]
