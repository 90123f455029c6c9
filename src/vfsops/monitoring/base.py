"""Base provider abstract class and counter data structures.

Providers implement this interface to supply raw counter snapshots for a named
kstat group. The rest of the pipeline works on the typed records defined here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from vfsops.core.constants import ZONE_COLUMN_WIDTH

logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """The counter source could not produce a snapshot."""


class MalformedRecordError(ValueError):
    """A provider record does not match the expected zone_vfs schema."""

    def __init__(self, instance: int | None, message: str) -> None:
        self.instance = instance
        super().__init__(f"instance {instance}: {message}")


@dataclass
class KstatRecord:
    """Raw statistics for one kstat instance, as returned by a provider."""

    module: str
    instance: int
    name: str  # kstat name (zone name, possibly truncated by the kernel)
    data: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class LatencyBuckets:
    """Operation counts per latency bucket.

    As absolute counters these only grow for the lifetime of a zone; as
    deltas they count operations during one interval.
    """

    ten_ms: int = 0
    one_hundred_ms: int = 0
    one_second: int = 0
    ten_second: int = 0

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.ten_ms, self.one_hundred_ms, self.one_second, self.ten_second)

    def is_zero(self) -> bool:
        return not any(self.as_tuple())


@dataclass(frozen=True)
class CounterRecord:
    """One zone's counters at one poll instant."""

    instance_id: int
    tenant_name: str
    buckets: LatencyBuckets


@dataclass(frozen=True)
class DeltaRow:
    """Per-interval activity for one zone, ready for filtering and rendering."""

    instance_id: int
    tenant_name: str  # full name, used for filter matching
    deltas: LatencyBuckets
    is_first_sample: bool = False
    # A bucket went backwards since the last poll and was clamped to zero
    reset_observed: bool = False

    @property
    def display_name(self) -> str:
        """Zone name truncated to the table's zone column."""
        return self.tenant_name[:ZONE_COLUMN_WIDTH]


class BaseProvider(ABC):
    """Abstract base class for counter snapshot providers.

    Implementations:
    - KstatProvider: parses ``kstat -p`` output on illumos/SmartOS
    """

    @abstractmethod
    def fetch_snapshot(self, group_name: str) -> list[KstatRecord]:
        """Return the current records of every instance in a kstat group.

        Args:
            group_name: kstat module name (e.g. "zone_vfs")

        Returns:
            One KstatRecord per instance

        Raises:
            ProviderError: If the snapshot cannot be read
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider can run on the current system."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this provider."""
        pass
