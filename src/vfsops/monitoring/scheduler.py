"""Poll scheduler: the fixed-interval sampling loop.

Owns the previous sample index, replacing it as a whole after each poll, and
drives provider -> sample index -> delta engine -> filter -> renderer.

Example:
    ```python
    scheduler = PollScheduler(KstatProvider(), MonitorConfig(interval_seconds=1, count=3))
    scheduler.run()
    ```
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum

from vfsops.core.schemas import MonitorConfig
from vfsops.monitoring.base import BaseProvider
from vfsops.monitoring.delta import compute_deltas
from vfsops.monitoring.filters import filter_rows
from vfsops.monitoring.render import TableRenderer, resolve_stream, sort_rows
from vfsops.monitoring.sample_index import SampleIndex, index_snapshot

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    """Lifecycle of a polling session."""

    INIT = "init"
    POLLING = "polling"
    DONE = "done"


class PollScheduler:
    """Fixed-interval poller for per-zone VFS latency counters.

    Single-threaded: the only blocking calls are the provider snapshot and the
    sleep between polls. Provider and decode errors propagate to the caller
    and end the session.
    """

    def __init__(
        self,
        provider: BaseProvider,
        config: MonitorConfig | None = None,
        renderer: TableRenderer | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            provider: Source of raw counter snapshots
            config: Session configuration (default: MonitorConfig())
            renderer: Table renderer (default: writes to the configured stream)
            sleep: Sleep function (default: time.sleep)
        """
        self._provider = provider
        self._config = config if config is not None else MonitorConfig()
        self._renderer = (
            renderer if renderer is not None else TableRenderer(resolve_stream(self._config.output))
        )
        self._sleep = sleep if sleep is not None else time.sleep
        self._state = SchedulerState.INIT
        self._previous: SampleIndex | None = None
        self._polls = 0
        self._since_header = 0
        self._stop_requested = False

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def polls(self) -> int:
        """Number of completed polls."""
        return self._polls

    @property
    def previous(self) -> SampleIndex | None:
        """Sample index of the last completed poll."""
        return self._previous

    def stop(self) -> None:
        """Request the loop to end before its next poll.

        Only sets a flag, so it is safe to call from a signal handler.
        """
        self._stop_requested = True

    def _start(self) -> None:
        if not self._config.hide_header:
            self._renderer.write_header()
            self._renderer.flush()
        self._previous = None
        self._polls = 0
        self._since_header = 0
        self._state = SchedulerState.POLLING

    def _count_reached(self) -> bool:
        return self._config.count is not None and self._polls >= self._config.count

    def step(self) -> int:
        """Run one poll.

        Returns:
            Number of rows printed

        Raises:
            ProviderError: If the snapshot cannot be read
            MalformedRecordError: If a record does not match the expected schema
        """
        if self._state is SchedulerState.INIT:
            self._start()

        current = index_snapshot(self._provider.fetch_snapshot(self._config.group))

        reprint_header = self._since_header >= self._config.header_every
        if reprint_header:
            self._since_header = 0

        rows = compute_deltas(current, self._previous)
        rows = filter_rows(rows, self._config.zone_filter, self._config.show_all)
        rows = sort_rows(rows, self._config.sort_order)
        printed = self._renderer.render(
            rows, emit_header=reprint_header and not self._config.hide_header
        )

        self._previous = current
        self._since_header += 1
        self._polls += 1
        logger.debug(f"Poll {self._polls}: {len(current)} zones, {printed} rows printed")
        return printed

    def run(self) -> int:
        """Poll until the configured count is reached or stop() is called.

        Returns:
            Number of completed polls
        """
        if self._state is SchedulerState.INIT:
            self._start()

        while not self._stop_requested and not self._count_reached():
            self.step()
            if self._stop_requested or self._count_reached():
                break
            self._sleep(self._config.interval_seconds)

        self._state = SchedulerState.DONE
        logger.debug(f"Polling finished after {self._polls} polls")
        return self._polls
