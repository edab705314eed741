from __future__ import annotations

from .session import Session
from .errors import (
    IviLogError,
    LaunchError,
    CommandTimeoutError,
    NonZeroExitError,
    NoDeviceError,
    OutputDirectoryError,
    WriteError,
)
from .models import CommandInvocation, ExecutionResult, DeviceState, DeviceRecord, LogFile, Outcome
from .drivers.adb import AdbRunner, build_invocation
from .drivers.devices import parse_devices, find_ready, probe_devices, is_ready
from .reporting import Severity, Reporter, ConsoleReporter, MemoryReporter, JsonlReporter
from .tasks.logcat import LogcatDump

__all__ = [
    "Session",
    "IviLogError",
    "LaunchError",
    "CommandTimeoutError",
    "NonZeroExitError",
    "NoDeviceError",
    "OutputDirectoryError",
    "WriteError",
    "CommandInvocation",
    "ExecutionResult",
    "DeviceState",
    "DeviceRecord",
    "LogFile",
    "Outcome",
    "AdbRunner",
    "build_invocation",
    "parse_devices",
    "find_ready",
    "probe_devices",
    "is_ready",
    "Severity",
    "Reporter",
    "ConsoleReporter",
    "MemoryReporter",
    "JsonlReporter",
    "LogcatDump",
]
