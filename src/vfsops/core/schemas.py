"""Pydantic schemas for vfsops.

Defines the runtime configuration of a monitoring session. Counter records and
delta rows are plain dataclasses (see ``vfsops.monitoring.base``) since they are
created on every poll and never validated from user input.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from vfsops.core.constants import DEFAULT_INTERVAL_SECONDS, DEFAULT_KSTAT_GROUP, HEADER_EVERY


class SortOrder(str, Enum):
    """Row ordering applied by the table renderer."""

    ABSOLUTE = "abs"  # abs(instance_id), then instance_id
    ASCENDING = "plain"  # instance_id


class OutputStream(str, Enum):
    """Stream the table is written to."""

    STDERR = "stderr"
    STDOUT = "stdout"


class LogLevel(str, Enum):
    """Accepted logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class MonitorConfig(BaseModel):
    """Configuration for a polling session.

    The defaults describe the fixed-interval mode: poll every five seconds,
    forever, with headers shown and zero-activity zones hidden.

    Attributes:
        interval_seconds: Seconds to sleep between polls
        count: Number of polls before exiting (None = run forever)
        hide_header: Never print header lines
        zone_filter: Only show the zone whose full name matches exactly
        show_all: Show zones with no activity during the interval
        sort_order: Row ordering rule
        output: Stream the table is written to
        group: kstat module to read
        header_every: Re-print the header after this many polls
    """

    interval_seconds: int = Field(default=DEFAULT_INTERVAL_SECONDS, ge=1)
    count: int | None = Field(default=None, ge=0, description="Polls before exit")
    hide_header: bool = Field(default=False)
    zone_filter: str | None = Field(default=None, description="Exact zone name filter")
    show_all: bool = Field(default=False, description="Show zones with no activity")
    sort_order: SortOrder = Field(default=SortOrder.ABSOLUTE)
    output: OutputStream = Field(default=OutputStream.STDERR)
    group: str = Field(default=DEFAULT_KSTAT_GROUP, min_length=1)
    header_every: int = Field(default=HEADER_EVERY, ge=1)

    model_config = {"extra": "forbid"}
