"""
Android IVI Log Extractor
Run: python -m pkg.ivilog --help

Dumps the logcat buffer of a connected device to
<output_directory>/ivi_logcat_<device>_<yyyyMMdd_HHmmss>.txt
"""
from __future__ import annotations

import argparse
import sys
from typing import Callable, List, Optional

from .config import Settings
from .drivers.adb import AdbRunner
from .naming import build_log_filename, resolve_output_dir
from .reporting import ConsoleReporter, JsonlReporter, Reporter, TeeReporter
from .session import Session

EPILOG = """\
examples:
  ivilog
      prompt for the output directory, use the first available device
  ivilog emulator-5554
      target 'emulator-5554', prompt for the output directory
  ivilog R58M726X7XN D:\\AndroidLogs
      target 'R58M726X7XN', save to 'D:\\AndroidLogs'

prerequisites:
  - Android Debug Bridge (adb) installed and on PATH (or set IVILOG_ADB).
  - Device or emulator connected with USB debugging enabled and authorized.

exit status:
  0  log file written
  1  no ready device, adb failure, or the log file could not be written
  2  invalid command line
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ivilog",
        description="Android IVI Log Extractor: dump a device's logcat buffer to a text file",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "device_id",
        nargs="?",
        default=None,
        help="serial of the device to target (default: first device in 'device' state)",
    )
    p.add_argument(
        "output_directory",
        nargs="?",
        default=None,
        help="directory to save logs in (default: prompt, falling back to ~/ivi_logs)",
    )
    return p


def build_reporter(settings: Settings) -> Reporter:
    console = ConsoleReporter()
    if settings.audit_log is None:
        return console
    return TeeReporter([console, JsonlReporter(settings.audit_log)])


def _ask(prompt: Callable[[str], str]) -> Callable[[str], str]:
    def ask(message: str) -> str:
        try:
            return prompt(message)
        except EOFError:
            return ""
    return ask


def main(
    argv: Optional[List[str]] = None,
    prompt: Callable[[str], str] = input,
    settings: Optional[Settings] = None,
) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or Settings.from_env()
    reporter = build_reporter(settings)
    for warning in settings.warnings:
        reporter.error(warning)

    reporter.info("Android IVI Log Extractor")
    reporter.info("=========================")

    target = args.device_id
    if target:
        reporter.info(f"User specified target device: {target}")

    session = Session(AdbRunner(settings.tool, settings.timeout, reporter), reporter)
    if not session.is_ready(target):
        matching = f" matching ID '{target}'" if target else ""
        reporter.error(f"Pre-requisite check failed: No operational Android device/emulator found{matching}.")
        reporter.error(
            "Please ensure a device is connected, authorized for USB debugging, "
            "and in 'device' state (not 'unauthorized' or 'offline')."
        )
        reporter.error("You can check connected devices by running 'adb devices' in your terminal.")
        reporter.info("Log Extractor finished with errors.")
        return 1
    reporter.info(f"Device {target or 'default'} connected and ready.")

    output_dir = resolve_output_dir(args.output_directory, settings.default_output_dir, _ask(prompt))
    reporter.info(f"Using output directory: {output_dir.absolute()}")

    file_name = build_log_filename(target)
    reporter.info("Starting logcat extraction...")
    reporter.info(f"Logs will be saved to: {(output_dir / file_name).absolute()}")

    outcome = session.extract(target, output_dir, file_name)
    if outcome.ok:
        reporter.success("Log extraction successful!")
        reporter.success(f"Log file saved at: {outcome.path.absolute()}")
        reporter.info("Log Extractor finished successfully.")
        return 0

    reporter.error(f"Log extraction failed ({outcome.error.code}). Please check the messages above for ADB errors or file system issues.")
    reporter.error(
        "Ensure 'adb' is in your system PATH and the connected device remains "
        "authorized and operational during extraction."
    )
    if outcome.error.recoverable:
        reporter.info("This failure may be transient; running the extractor again may succeed.")
    reporter.info("Log Extractor finished with errors.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
