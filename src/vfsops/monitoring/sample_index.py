"""Sample index: per-poll lookup of zone counters by kstat instance.

Provider records are decoded here into typed CounterRecords. Any record that
does not carry the expected statistics is a schema mismatch with the data
source and raises MalformedRecordError.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from vfsops.core.constants import BUCKET_STATS, ZONENAME_STAT
from vfsops.monitoring.base import CounterRecord, KstatRecord, LatencyBuckets, MalformedRecordError

SampleIndex = Mapping[int, CounterRecord]


def _read_string(record: KstatRecord, statistic: str) -> str:
    if statistic not in record.data:
        raise MalformedRecordError(record.instance, f"missing statistic {statistic!r}")
    value = record.data[statistic]
    if not isinstance(value, str):
        raise MalformedRecordError(
            record.instance, f"{statistic!r} is not a string: {type(value).__name__}"
        )
    return value


def _read_counter(record: KstatRecord, statistic: str) -> int:
    if statistic not in record.data:
        raise MalformedRecordError(record.instance, f"missing statistic {statistic!r}")
    value = record.data[statistic]

    # bool is an int subclass but never a counter
    if isinstance(value, bool):
        raise MalformedRecordError(record.instance, f"{statistic!r} is not a counter: {value!r}")
    if isinstance(value, int):
        counter = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        counter = int(value)
    else:
        raise MalformedRecordError(record.instance, f"{statistic!r} is not a counter: {value!r}")

    if counter < 0:
        raise MalformedRecordError(record.instance, f"{statistic!r} is negative: {counter}")
    return counter


def decode_record(record: KstatRecord) -> CounterRecord:
    """Decode a raw provider record into a CounterRecord.

    Args:
        record: Raw statistics for one instance

    Returns:
        Typed counter record

    Raises:
        MalformedRecordError: If the zone name or a bucket counter is missing
            or has the wrong shape
    """
    buckets = LatencyBuckets(
        **{field_name: _read_counter(record, stat) for field_name, stat in BUCKET_STATS.items()}
    )
    return CounterRecord(
        instance_id=record.instance,
        tenant_name=_read_string(record, ZONENAME_STAT),
        buckets=buckets,
    )


def build_index(records: Iterable[CounterRecord]) -> SampleIndex:
    """Key counter records by instance id.

    Later records win when two share an instance id. The returned mapping is
    read-only.
    """
    return MappingProxyType({r.instance_id: r for r in records})


def index_snapshot(records: Iterable[KstatRecord]) -> SampleIndex:
    """Decode a provider snapshot and build its sample index."""
    return build_index(decode_record(r) for r in records)
