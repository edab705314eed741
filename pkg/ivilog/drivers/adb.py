from __future__ import annotations

import subprocess
from typing import Sequence

from ..config import DEFAULT_TIMEOUT, DEFAULT_TOOL
from ..errors import CommandTimeoutError, LaunchError, NonZeroExitError
from ..models import CommandInvocation, ExecutionResult
from ..reporting import ConsoleReporter, Reporter


def build_invocation(tool: str, device: str | None, args: Sequence[str]) -> CommandInvocation:
    if not args:
        raise ValueError("args must be non-empty")
    return CommandInvocation(tool=tool, args=tuple(args), device=device or None)


def split_lines(output: str) -> list[str]:
    # universal newlines already folded \r\n and \r into \n
    lines = output.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class AdbRunner:
    """
    Runs one device-bridge command per call and captures merged stdout/stderr.

    A call is a single attempt: the process is killed once ``timeout``
    seconds pass, and nothing is retried.
    """

    def __init__(self, tool: str = DEFAULT_TOOL, timeout: float = DEFAULT_TIMEOUT, reporter: Reporter | None = None) -> None:
        self.tool = tool
        self.timeout = timeout
        self.reporter = reporter or ConsoleReporter()

    def run(self, device: str | None, args: Sequence[str]) -> ExecutionResult:
        invocation = build_invocation(self.tool, device, args)
        argv = invocation.argv
        self.reporter.info(f"Executing ADB command: {invocation}")
        try:
            proc = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            reason = exc.strerror or str(exc)
            self.reporter.error(f"Could not start ADB command: {invocation} ({reason})")
            raise LaunchError(argv, reason) from exc

        try:
            output, _ = proc.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            proc.kill()
            # wait() rather than communicate(): a grandchild may still hold the pipe open
            proc.wait()
            if proc.stdout is not None:
                proc.stdout.close()
            self.reporter.error(f"ADB command timed out: {invocation}")
            timed_out = ExecutionResult(invocation=invocation, lines=(), returncode=None, timed_out=True)
            raise CommandTimeoutError(argv, self.timeout, timed_out) from None

        lines = split_lines(output or "")
        if proc.returncode != 0:
            err = NonZeroExitError(argv, proc.returncode, lines)
            self.reporter.error(
                f"ADB command failed with exit code {proc.returncode}: {invocation}",
                returncode=proc.returncode,
            )
            self.reporter.error(f"ADB command output:\n{err.display_output}")
            raise err

        self.reporter.info("ADB command executed successfully.")
        return ExecutionResult(invocation=invocation, lines=tuple(lines), returncode=0)
