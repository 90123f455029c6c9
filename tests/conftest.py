"""Shared fixtures for vfsops tests."""

from __future__ import annotations

import pytest

from vfsops.monitoring.base import KstatRecord


def make_kstat(
    instance: int,
    zonename: str,
    ten_ms: int = 0,
    one_hundred_ms: int = 0,
    one_second: int = 0,
    ten_second: int = 0,
) -> KstatRecord:
    """Build a zone_vfs record the way KstatProvider returns it."""
    return KstatRecord(
        module="zone_vfs",
        instance=instance,
        name=zonename[:30],
        data={
            "zonename": zonename,
            "10ms_ops": str(ten_ms),
            "100ms_ops": str(one_hundred_ms),
            "1s_ops": str(one_second),
            "10s_ops": str(ten_second),
            "class": "zone_vfs",
        },
    )


@pytest.fixture
def kstat_factory():
    return make_kstat
