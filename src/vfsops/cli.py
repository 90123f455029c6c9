"""CLI for vfsops.

Reports VFS operation outliers per zone. Operation counts are grouped into
10ms, 100ms, 1s and 10s latency buckets. The first poll shows each zone's
totals since boot; later polls show the operations counted during the
interval. By default only zones with activity are printed.
"""

from __future__ import annotations

import signal
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from vfsops import __version__
from vfsops.core.config import load_config, merge_overrides
from vfsops.core.schemas import LogLevel, MonitorConfig, OutputStream, SortOrder
from vfsops.monitoring.base import MalformedRecordError, ProviderError
from vfsops.monitoring.kstat_provider import KstatProvider
from vfsops.monitoring.scheduler import PollScheduler
from vfsops.utils.logging import get_logger, setup_logging

app = typer.Typer(
    name="vfsops",
    help="Report VFS op outliers by bucket group",
    add_completion=False,
)

console = Console(stderr=True)
logger = get_logger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"vfsops {__version__}", markup=False, highlight=False)
        raise typer.Exit()


@app.command()
def main(
    interval: int = typer.Argument(
        ..., min=1, metavar="INTERVAL", help="Print results per interval (seconds)"
    ),
    count: int | None = typer.Argument(
        None, min=0, metavar="[COUNT]", help="Print for n times and exit"
    ),
    hide_header: bool = typer.Option(False, "-H", help="Don't print the header"),
    zone: str | None = typer.Option(
        None, "-z", "--zone", metavar="ZONE", help="Print data for a specific zonename"
    ),
    show_all: bool = typer.Option(False, "-Z", help="Print zones with no activity"),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Configuration file with defaults (YAML/JSON)"
    ),
    stdout: bool = typer.Option(
        False, "--stdout", help="Write the table to standard output instead of standard error"
    ),
    sort: SortOrder | None = typer.Option(
        None, "--sort", case_sensitive=False, help="Row order: abs (default) or plain instance id"
    ),
    group: str | None = typer.Option(None, "--group", help="kstat module to read"),
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING, "--log-level", "-l", case_sensitive=False, help="Logging level"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file in addition to the console"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Output logs in JSON format"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """Report VFS op outliers by bucket group."""
    setup_logging(
        level=log_level.value,
        log_file=log_file,
        json_format=json_logs,
        rich_console=not json_logs,
    )

    try:
        base = load_config(config) if config is not None else MonitorConfig()
        monitor_config = merge_overrides(
            base,
            interval_seconds=interval,
            count=count,
            hide_header=hide_header or None,
            zone_filter=zone,
            show_all=show_all or None,
            sort_order=sort,
            output=OutputStream.STDOUT if stdout else None,
            group=group,
        )
    except Exception as e:
        console.print(f"[bold red]Error loading config: {escape(str(e))}[/]")
        raise typer.Exit(1) from e

    logger.debug(f"Monitor configuration: {monitor_config.model_dump()}")

    scheduler = PollScheduler(KstatProvider(), monitor_config)
    previous_handler = signal.signal(signal.SIGTERM, lambda signum, frame: scheduler.stop())

    try:
        scheduler.run()
    except (ProviderError, MalformedRecordError) as e:
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from e
    except KeyboardInterrupt:
        raise typer.Exit(130) from None
    finally:
        signal.signal(signal.SIGTERM, previous_handler)


if __name__ == "__main__":
    app()
