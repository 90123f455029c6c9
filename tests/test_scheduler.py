"""Tests for PollScheduler."""

import io
from unittest.mock import MagicMock

import pytest

from vfsops.core.constants import ROW_FORMAT
from vfsops.core.schemas import MonitorConfig
from vfsops.monitoring.base import BaseProvider, MalformedRecordError, ProviderError
from vfsops.monitoring.render import TableRenderer, format_header
from vfsops.monitoring.scheduler import PollScheduler, SchedulerState

HEADER = format_header()


class TestPollScheduler:
    """Tests for the polling loop."""

    @pytest.fixture
    def snapshots(self, kstat_factory):
        """Two polls of the two-zone example session."""
        return [
            [kstat_factory(1, "global", ten_ms=100), kstat_factory(2, "ngz-001", ten_ms=50)],
            [kstat_factory(1, "global", ten_ms=105), kstat_factory(2, "ngz-001", ten_ms=50)],
        ]

    def _run(self, snapshots, **config) -> tuple[list[str], MagicMock, PollScheduler]:
        provider = MagicMock(spec=BaseProvider)
        provider.fetch_snapshot.side_effect = list(snapshots)
        sleep = MagicMock()
        stream = io.StringIO()
        scheduler = PollScheduler(
            provider,
            MonitorConfig(interval_seconds=1, count=len(snapshots), **config),
            renderer=TableRenderer(stream),
            sleep=sleep,
        )
        scheduler.run()
        return stream.getvalue().splitlines(), sleep, scheduler

    def test_default_session(self, snapshots) -> None:
        """Test totals on the first poll, then only active zones."""
        lines, _, _ = self._run(snapshots)

        assert lines == [
            HEADER,
            ROW_FORMAT.format("global", 100, 0, 0, 0),
            ROW_FORMAT.format("ngz-001", 50, 0, 0, 0),
            ROW_FORMAT.format("global", 5, 0, 0, 0),
        ]

    def test_show_all(self, snapshots) -> None:
        lines, _, _ = self._run(snapshots, show_all=True)

        assert lines[-2:] == [
            ROW_FORMAT.format("global", 5, 0, 0, 0),
            ROW_FORMAT.format("ngz-001", 0, 0, 0, 0),
        ]

    def test_zone_filter(self, snapshots) -> None:
        lines, _, _ = self._run(snapshots, zone_filter="ngz-001")

        assert lines == [
            HEADER,
            ROW_FORMAT.format("ngz-001", 50, 0, 0, 0),
            ROW_FORMAT.format("ngz-001", 0, 0, 0, 0),
        ]

    def test_hide_header(self, snapshots) -> None:
        lines, _, _ = self._run(snapshots, hide_header=True)
        assert HEADER not in lines

    def test_group_passed_to_provider(self, snapshots) -> None:
        _, _, scheduler = self._run(snapshots, group="zone_vfs")
        scheduler._provider.fetch_snapshot.assert_called_with("zone_vfs")

    def test_sleeps_between_polls_only(self, snapshots) -> None:
        _, sleep, scheduler = self._run(snapshots)

        sleep.assert_called_once_with(1)
        assert scheduler.polls == 2
        assert scheduler.state is SchedulerState.DONE

    def test_count_zero(self) -> None:
        """Test that a zero count prints the header and never polls."""
        lines, sleep, scheduler = self._run([])

        assert lines == [HEADER]
        assert scheduler.polls == 0
        sleep.assert_not_called()

    def test_header_reprinted_every_six_polls(self, kstat_factory) -> None:
        snapshots = [[kstat_factory(1, "global", ten_ms=i)] for i in range(14)]

        lines, _, _ = self._run(snapshots)

        header_positions = [i for i, line in enumerate(lines) if line == HEADER]
        # initial header, then before poll 7 and poll 13 (one row per poll)
        assert header_positions == [0, 7, 14]

    def test_header_not_reprinted_when_hidden(self, kstat_factory) -> None:
        snapshots = [[kstat_factory(1, "global", ten_ms=i)] for i in range(8)]

        lines, _, _ = self._run(snapshots, hide_header=True)

        assert HEADER not in lines
        assert len(lines) == 8

    def test_new_zone_appears_next_poll(self, kstat_factory) -> None:
        snapshots = [
            [kstat_factory(1, "global", ten_ms=1)],
            [kstat_factory(1, "global", ten_ms=2), kstat_factory(5, "late", ten_ms=900)],
            [kstat_factory(1, "global", ten_ms=3), kstat_factory(5, "late", ten_ms=901)],
        ]

        lines, _, _ = self._run(snapshots)

        assert ROW_FORMAT.format("late", 900, 0, 0, 0) not in lines
        assert lines[-1] == ROW_FORMAT.format("late", 1, 0, 0, 0)

    def test_previous_replaced_each_poll(self, snapshots) -> None:
        provider = MagicMock(spec=BaseProvider)
        provider.fetch_snapshot.side_effect = snapshots
        scheduler = PollScheduler(
            provider, MonitorConfig(interval_seconds=1), renderer=TableRenderer(io.StringIO())
        )

        scheduler.step()
        first = scheduler.previous
        scheduler.step()

        assert scheduler.previous is not first
        assert first[1].buckets.ten_ms == 100
        assert scheduler.previous[1].buckets.ten_ms == 105

    def test_provider_failure_is_fatal(self) -> None:
        provider = MagicMock(spec=BaseProvider)
        provider.fetch_snapshot.side_effect = ProviderError("kstat exited with status 1")
        scheduler = PollScheduler(
            provider, MonitorConfig(interval_seconds=1), renderer=TableRenderer(io.StringIO())
        )

        with pytest.raises(ProviderError):
            scheduler.run()
        assert provider.fetch_snapshot.call_count == 1

    def test_malformed_record_is_fatal(self, kstat_factory) -> None:
        bad = kstat_factory(1, "global")
        del bad.data["10s_ops"]
        provider = MagicMock(spec=BaseProvider)
        provider.fetch_snapshot.return_value = [bad]
        scheduler = PollScheduler(
            provider, MonitorConfig(interval_seconds=1), renderer=TableRenderer(io.StringIO())
        )

        with pytest.raises(MalformedRecordError):
            scheduler.run()

    def test_stop_ends_loop(self, kstat_factory) -> None:
        """Test that stop() ends an unbounded run before the next poll."""
        provider = MagicMock(spec=BaseProvider)
        provider.fetch_snapshot.return_value = [kstat_factory(1, "global")]
        scheduler = PollScheduler(
            provider, MonitorConfig(interval_seconds=1), renderer=TableRenderer(io.StringIO())
        )
        polls_before_stop = 3

        def sleep(_seconds: float) -> None:
            if scheduler.polls >= polls_before_stop:
                scheduler.stop()

        scheduler._sleep = sleep
        assert scheduler.run() == polls_before_stop
        assert scheduler.state is SchedulerState.DONE
