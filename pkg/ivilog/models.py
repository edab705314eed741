from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # avoid import cycle
    from .errors import IviLogError  # pragma: no cover


@dataclass(frozen=True, slots=True)
class CommandInvocation:
    tool: str
    args: tuple[str, ...]
    device: str | None = None

    @property
    def argv(self) -> list[str]:
        if self.device:
            return [self.tool, "-s", self.device, *self.args]
        return [self.tool, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Captured output of one external command.

    ``returncode`` is None only when the command timed out.
    """
    invocation: CommandInvocation
    lines: tuple[str, ...]
    returncode: int | None
    timed_out: bool = False

    def __post_init__(self) -> None:
        if not self.timed_out and self.returncode is None:
            raise ValueError("returncode required unless timed out")


class DeviceState(enum.Enum):
    DEVICE = "device"
    UNAUTHORIZED = "unauthorized"
    OFFLINE = "offline"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, token: str) -> "DeviceState":
        try:
            return cls(token.lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class DeviceRecord:
    identifier: str
    state: DeviceState
    raw_state: str = ""

    def __post_init__(self) -> None:
        if not self.identifier:
            raise ValueError("device identifier must be non-empty")

    @property
    def ready(self) -> bool:
        return self.state is DeviceState.DEVICE


@dataclass(frozen=True, slots=True)
class LogFile:
    path: Path
    lines: tuple[str, ...]
    sha256: str


@dataclass(frozen=True, slots=True)
class Outcome:
    """
    Result of an extraction: either a written log file or the error that stopped it.
    """
    log_file: LogFile | None = None
    error: "IviLogError | None" = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.log_file is not None

    @property
    def path(self) -> Path | None:
        return self.log_file.path if self.log_file else None
