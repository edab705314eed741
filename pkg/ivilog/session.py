from __future__ import annotations

from pathlib import Path
from typing import List

from .drivers.adb import AdbRunner
from .drivers.devices import CommandRunner, is_ready, probe_devices
from .errors import IviLogError, NoDeviceError
from .models import DeviceRecord, Outcome
from .reporting import ConsoleReporter, Reporter
from .tasks.logcat import LogcatDump


class Session:
    """
    Orchestrates one log extraction against the device bridge.
    """

    def __init__(self, runner: CommandRunner | None = None, reporter: Reporter | None = None) -> None:
        self.reporter = reporter or ConsoleReporter()
        self.runner = runner or AdbRunner(reporter=self.reporter)

    def discover(self) -> List[DeviceRecord]:
        return probe_devices(self.runner)

    def is_ready(self, target: str | None = None) -> bool:
        return is_ready(self.runner, target, self.reporter)

    def extract(self, target: str | None, output_dir: str | Path, file_name: str) -> Outcome:
        """
        Check readiness, dump the log buffer and write it to output_dir/file_name.

        Failures never propagate; they come back as Outcome.error.
        """
        self.reporter.info(f"Attempting to extract logcat for device: {target or 'default'}")
        if not self.is_ready(target):
            self.reporter.error("Cannot extract logcat, device not connected or not in operational state.")
            return Outcome(error=NoDeviceError(target))

        task = LogcatDump(target, output_dir, file_name)
        try:
            log_file = task.run(self)
        except IviLogError as exc:
            self.reporter.error(f"Error during logcat extraction or file writing: {exc}", code=exc.code, task=task.name)
            return Outcome(error=exc)

        self.reporter.info(
            f"Logs extracted successfully to: {log_file.path.absolute()}",
            lines=len(log_file.lines),
            sha256=log_file.sha256,
        )
        return Outcome(log_file=log_file)
