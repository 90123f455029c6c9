"""Table renderer for delta rows.

Output is plain fixed-width text with no color, so existing scripts can parse
it column by column:

        zone   10ms_ops  100ms_ops     1s_ops    10s_ops
      global          5          0          0          0
    ngz-001a         12          1          0          0
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from vfsops.core.constants import HEADER_LABELS, ROW_FORMAT
from vfsops.core.schemas import OutputStream, SortOrder
from vfsops.monitoring.base import DeltaRow


def sort_rows(rows: Iterable[DeltaRow], order: SortOrder = SortOrder.ABSOLUTE) -> list[DeltaRow]:
    """Order rows by instance id.

    ``SortOrder.ABSOLUTE`` sorts on the absolute instance id, breaking ties
    with the signed id, so ids {3, -5, 1} print as 1, 3, -5.
    ``SortOrder.ASCENDING`` sorts on the signed id.
    """
    if order is SortOrder.ASCENDING:
        return sorted(rows, key=lambda r: r.instance_id)
    return sorted(rows, key=lambda r: (abs(r.instance_id), r.instance_id))


def format_header() -> str:
    return ROW_FORMAT.format(*HEADER_LABELS)


def format_row(row: DeltaRow) -> str:
    return ROW_FORMAT.format(row.display_name, *row.deltas.as_tuple())


def render_lines(rows: Iterable[DeltaRow], emit_header: bool = False) -> list[str]:
    """Format rows (already ordered) as table lines, optionally led by a header."""
    lines = [format_header()] if emit_header else []
    lines.extend(format_row(row) for row in rows)
    return lines


def resolve_stream(output: OutputStream) -> TextIO:
    """Map an output setting to the process stream."""
    if output is OutputStream.STDOUT:
        return sys.stdout
    return sys.stderr


class TableRenderer:
    """Writes table lines to a text stream, one line per write."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize the renderer.

        Args:
            stream: Destination stream (default: standard error)
        """
        self._stream = stream if stream is not None else sys.stderr

    @property
    def stream(self) -> TextIO:
        return self._stream

    def write_header(self) -> None:
        self._stream.write(format_header() + "\n")

    def render(self, rows: Iterable[DeltaRow], emit_header: bool = False) -> int:
        """Write rows and flush the stream.

        Returns:
            Number of data rows written
        """
        lines = render_lines(rows, emit_header)
        for line in lines:
            self._stream.write(line + "\n")
        self.flush()
        return len(lines) - 1 if emit_header else len(lines)

    def flush(self) -> None:
        self._stream.flush()
