from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # avoid import cycle
    from .models import ExecutionResult  # pragma: no cover

DISPLAY_LIMIT = 1000


class IviLogError(Exception):
    """
    ivilog base error.

    Every failure of an extraction step is one of these, so callers can
    branch on ``code`` instead of parsing messages.
    """
    def __init__(self, code: str, hint: str = "", recoverable: bool = False) -> None:
        super().__init__(f"{code}: {hint}" if hint else code)
        self.code = code
        self.hint = hint
        self.recoverable = recoverable


class LaunchError(IviLogError):
    def __init__(self, command: Sequence[str], reason: str) -> None:
        super().__init__("LAUNCH_FAILED", f"{' '.join(command)} ({reason})")
        self.command = tuple(command)
        self.reason = reason


class CommandTimeoutError(IviLogError):
    """The command was killed after ``timeout`` seconds.

    ``result`` is the timed-out ExecutionResult: no return code, ``timed_out`` set.
    """
    def __init__(self, command: Sequence[str], timeout: float, result: "ExecutionResult | None" = None) -> None:
        super().__init__(
            "TIMEOUT",
            f"{' '.join(command)} did not finish within {timeout:g}s",
            recoverable=True,
        )
        self.command = tuple(command)
        self.timeout = timeout
        self.result = result


class NonZeroExitError(IviLogError):
    """The command ran but exited with a non-zero status.

    ``lines`` holds the full captured output; only ``display_output`` is cut.
    """
    def __init__(self, command: Sequence[str], returncode: int, lines: Sequence[str]) -> None:
        self.command = tuple(command)
        self.returncode = returncode
        self.lines = tuple(lines)
        super().__init__(
            "NONZERO_EXIT",
            f"{' '.join(command)} exited with {returncode}. Output:\n{self.display_output}",
        )

    @property
    def display_output(self) -> str:
        return truncate("\n".join(self.lines))


class NoDeviceError(IviLogError):
    def __init__(self, target: str | None) -> None:
        hint = f"device {target!r} is not connected or not in 'device' state" if target else "no device in 'device' state"
        super().__init__("NO_DEVICE", hint, recoverable=True)
        self.target = target


class OutputDirectoryError(IviLogError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__("OUTPUT_DIR", f"{path}: {reason}")
        self.path = path


class WriteError(IviLogError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__("WRITE_FAILED", f"{path}: {reason}")
        self.path = path


def truncate(text: str, limit: int = DISPLAY_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "... (output truncated)"
