"""Delta engine: per-interval activity from two successive sample indexes."""

from __future__ import annotations

import logging

from vfsops.monitoring.base import DeltaRow, LatencyBuckets
from vfsops.monitoring.sample_index import SampleIndex

logger = logging.getLogger(__name__)


def bucket_delta(current: LatencyBuckets, previous: LatencyBuckets) -> tuple[LatencyBuckets, bool]:
    """Subtract two bucket readings, clamping regressions to zero.

    A counter that went backwards (zone reboot, kernel counter reset) yields
    0 for that bucket instead of a negative count.

    Returns:
        Tuple of (deltas, True if any bucket was clamped)
    """
    raw = [c - p for c, p in zip(current.as_tuple(), previous.as_tuple(), strict=True)]
    clamped = any(d < 0 for d in raw)
    return LatencyBuckets(*(max(0, d) for d in raw)), clamped


def compute_deltas(current: SampleIndex, previous: SampleIndex | None) -> list[DeltaRow]:
    """Compute per-zone deltas between two polls.

    On the first poll (``previous`` is None) every zone reports its since-boot
    totals, flagged as a first sample. After that, zones that were not present
    in the previous poll have no baseline and are skipped until the next poll.

    Args:
        current: Sample index of this poll
        previous: Sample index of the prior poll, or None on the first poll

    Returns:
        Unordered delta rows, one per reportable zone
    """
    if previous is None:
        return [
            DeltaRow(
                instance_id=record.instance_id,
                tenant_name=record.tenant_name,
                deltas=record.buckets,
                is_first_sample=True,
            )
            for record in current.values()
        ]

    rows: list[DeltaRow] = []
    for instance_id, record in current.items():
        old = previous.get(instance_id)
        if old is None:
            logger.debug(f"Zone {record.tenant_name} (instance {instance_id}) appeared, skipping")
            continue

        deltas, clamped = bucket_delta(record.buckets, old.buckets)
        if clamped:
            # Kept below WARNING so the default stderr table stays parseable
            logger.info(
                f"Counter regression for zone {record.tenant_name} (instance {instance_id}): "
                f"{old.buckets.as_tuple()} -> {record.buckets.as_tuple()}, clamped to zero"
            )

        rows.append(
            DeltaRow(
                instance_id=instance_id,
                tenant_name=record.tenant_name,
                deltas=deltas,
                reset_observed=clamped,
            )
        )

    return rows
