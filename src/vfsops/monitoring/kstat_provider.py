"""kstat provider for illumos/SmartOS kernel statistics.

Reads a kstat module through the ``kstat(1M)`` utility in parseable mode,
which prints one statistic per line:

    zone_vfs:0:global:100ms_ops	5
    zone_vfs:0:global:10ms_ops	123
    zone_vfs:0:global:zonename	global
    zone_vfs:3:a1b2c3d4-e5f6-:zonename	a1b2c3d4-e5f6-...

Statistics are grouped into one KstatRecord per instance. Values are kept as
strings; typing happens when records are decoded into CounterRecords.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from vfsops.monitoring.base import BaseProvider, KstatRecord, ProviderError

logger = logging.getLogger(__name__)


def parse_kstat_output(output: str) -> list[KstatRecord]:
    """Parse ``kstat -p`` output into one record per (module, instance).

    Args:
        output: Text printed by ``kstat -p``

    Returns:
        Records in order of first appearance

    Raises:
        ProviderError: If a line does not follow the parseable format
    """
    records: dict[tuple[str, int], KstatRecord] = {}

    for lineno, line in enumerate(output.splitlines(), start=1):
        if not line.strip():
            continue

        key, sep, value = line.partition("\t")
        if not sep:
            raise ProviderError(f"kstat output line {lineno} has no value: {line!r}")

        # module:instance:name:statistic - the name may itself contain ':'
        module, _, rest = key.partition(":")
        instance_str, _, rest = rest.partition(":")
        name, _, statistic = rest.rpartition(":")
        if not module or not statistic or not name:
            raise ProviderError(f"kstat output line {lineno} has a malformed key: {key!r}")

        try:
            instance = int(instance_str)
        except ValueError as e:
            raise ProviderError(
                f"kstat output line {lineno} has a non-numeric instance: {instance_str!r}"
            ) from e

        record = records.get((module, instance))
        if record is None:
            record = KstatRecord(module=module, instance=instance, name=name)
            records[(module, instance)] = record
        record.data[statistic] = value

    return list(records.values())


class KstatProvider(BaseProvider):
    """Provider that shells out to ``kstat -p -m <group>``.

    The call has no timeout: a hung kstat hangs the monitor.
    """

    def __init__(self, kstat_binary: str = "kstat") -> None:
        """Initialize the provider.

        Args:
            kstat_binary: Name or path of the kstat utility
        """
        self._kstat_binary = kstat_binary

    @property
    def name(self) -> str:
        return "kstat"

    def is_available(self) -> bool:
        """Check if the kstat utility is on PATH."""
        return shutil.which(self._kstat_binary) is not None

    def fetch_snapshot(self, group_name: str) -> list[KstatRecord]:
        cmd = [self._kstat_binary, "-p", "-m", group_name]
        logger.debug(f"Running {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise ProviderError(f"kstat utility not found: {self._kstat_binary}") from e
        except OSError as e:
            raise ProviderError(f"Failed to run {self._kstat_binary}: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise ProviderError(
                f"{self._kstat_binary} exited with status {result.returncode}"
                + (f": {stderr}" if stderr else "")
            )

        records = parse_kstat_output(result.stdout)
        if not records:
            # The global zone always has an instance
            raise ProviderError(f"No kstat records found for module {group_name!r}")

        logger.debug(f"Read {len(records)} {group_name} instances")
        return records
