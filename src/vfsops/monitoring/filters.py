"""Presentation filter: which delta rows are printed.

A zone filter keeps only the exactly-matching zone, whatever its activity.
Without one, idle zones are hidden unless every zone was requested or the row
carries since-boot totals from the first poll.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from vfsops.monitoring.base import DeltaRow

RowPredicate = Callable[[DeltaRow], bool]


def has_activity(row: DeltaRow) -> bool:
    """Check if any bucket counted an operation."""
    return not row.deltas.is_zero()


def matches_zone(zone: str) -> RowPredicate:
    """Predicate matching the full, untruncated zone name."""
    return lambda row: row.tenant_name == zone


def row_predicate(tenant_filter: str | None, show_all: bool) -> RowPredicate:
    """Build the keep/drop predicate for a filter configuration."""
    if tenant_filter is not None:
        return matches_zone(tenant_filter)
    if show_all:
        return lambda row: True
    return lambda row: row.is_first_sample or has_activity(row)


def filter_rows(
    rows: Iterable[DeltaRow],
    tenant_filter: str | None = None,
    show_all: bool = False,
) -> list[DeltaRow]:
    """Return the rows that should be printed.

    Args:
        rows: Delta rows for one poll
        tenant_filter: Exact zone name to show, or None for all zones
        show_all: Also show zones with no activity

    Returns:
        Rows to print, in input order
    """
    keep = row_predicate(tenant_filter, show_all)
    return [row for row in rows if keep(row)]
