from __future__ import annotations

from typing import Iterable, List, Protocol, Sequence

from ..errors import IviLogError
from ..models import DeviceRecord, DeviceState, ExecutionResult
from ..reporting import Reporter

LIST_DEVICES = ("devices",)
BANNER = "List of devices"


class CommandRunner(Protocol):
    def run(self, device: str | None, args: Sequence[str]) -> ExecutionResult: ...


def parse_devices(lines: Iterable[str]) -> List[DeviceRecord]:
    """
    Parse ``adb devices`` output into records.

    The first line is the banner and is always skipped. Daemon noise
    (``* daemon started ...``) and repeated banners are ignored, as are
    lines with fewer than two whitespace-separated tokens.
    """
    records: List[DeviceRecord] = []
    it = iter(lines)
    next(it, None)
    for raw in it:
        line = raw.strip()
        if not line or line.startswith("*") or line.startswith(BANNER):
            continue
        parts = line.split()
        if len(parts) < 2:
            continue
        records.append(DeviceRecord(identifier=parts[0], state=DeviceState.parse(parts[1]), raw_state=parts[1]))
    return records


def find_ready(records: Iterable[DeviceRecord], target: str | None = None) -> DeviceRecord | None:
    for rec in records:
        if not rec.ready:
            continue
        if not target or rec.identifier == target:
            return rec
    return None


def probe_devices(runner: CommandRunner) -> List[DeviceRecord]:
    """List every device the bridge reports. Execution errors propagate."""
    result = runner.run(None, LIST_DEVICES)
    return parse_devices(result.lines)


def is_ready(runner: CommandRunner, target: str | None, reporter: Reporter) -> bool:
    """True if ``target`` (or, without a target, any device) is in 'device' state. Never raises."""
    suffix = f" (specifically {target})" if target else ""
    reporter.info(f"Checking for ADB devices{suffix}...")
    try:
        # always query the full registry, never with a selector
        result = runner.run(None, LIST_DEVICES)
    except IviLogError as exc:
        reporter.error(f"Error checking for ADB devices: {exc}", code=exc.code)
        return False

    if len(result.lines) <= 1:
        reporter.info("No devices found or 'adb devices' returned empty list (after header).")
        return False

    records = parse_devices(result.lines)
    match = find_ready(records, target)
    for rec in records:
        if rec is match:
            break
        if not rec.ready:
            reporter.info(f"Device {rec.identifier} found but in state: {rec.raw_state}")
    if match is not None:
        if target:
            reporter.info(f"Specified device {target} found and connected.")
        else:
            reporter.info(f"At least one device found and connected: {match.identifier}")
        return True

    what = f"specified device ({target})" if target else "operational (state: device)"
    reporter.info(f"No {what} ADB device found.")
    return False
