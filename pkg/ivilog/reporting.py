from __future__ import annotations

import enum
import hashlib
import json
import sys
import time
from pathlib import Path
from typing import Any, Iterable, TextIO


class Severity(enum.Enum):
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class Reporter:
    """
    Sink for operator-facing progress and diagnostics.

    Subclasses implement report(); the helpers keep call sites short.
    """

    def report(self, severity: Severity, message: str, **data: Any) -> None:  # pragma: no cover
        raise NotImplementedError

    def info(self, message: str, **data: Any) -> None:
        self.report(Severity.INFO, message, **data)

    def success(self, message: str, **data: Any) -> None:
        self.report(Severity.SUCCESS, message, **data)

    def error(self, message: str, **data: Any) -> None:
        self.report(Severity.ERROR, message, **data)


class ConsoleReporter(Reporter):
    """INFO/SUCCESS to stdout, ERROR to stderr, prefixed with the severity."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = out
        self._err = err

    def report(self, severity: Severity, message: str, **data: Any) -> None:
        # resolve lazily so pytest's capsys sees the swapped streams
        if severity is Severity.ERROR:
            stream = self._err or sys.stderr
        else:
            stream = self._out or sys.stdout
        print(f"{severity.value}: {message}", file=stream)


class MemoryReporter(Reporter):
    def __init__(self) -> None:
        self.records: list[tuple[Severity, str, dict[str, Any]]] = []

    def report(self, severity: Severity, message: str, **data: Any) -> None:
        self.records.append((severity, message, data))

    def messages(self, severity: Severity | None = None) -> list[str]:
        return [m for s, m, _ in self.records if severity is None or s is severity]


class JsonlReporter(Reporter):
    """
    Append-only JSONL audit log with a simple hash chain.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._prev = ""

    def report(self, severity: Severity, message: str, **data: Any) -> None:
        ts = int(time.time())
        payload = {
            "ts": ts,
            "severity": severity.value,
            "message": message,
            "data": data,
            "prev": self._prev,
        }
        line = json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)
        h = hashlib.sha256(line.encode("utf-8")).hexdigest()
        self._prev = h
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
            f.flush()


class TeeReporter(Reporter):
    def __init__(self, reporters: Iterable[Reporter]) -> None:
        self.reporters = list(reporters)

    def report(self, severity: Severity, message: str, **data: Any) -> None:
        for r in self.reporters:
            r.report(severity, message, **data)


def verify_chain(path: Path) -> bool:
    """Return True if every entry's ``prev`` matches the hash of the line before it."""
    prev = ""
    with Path(path).open("r", encoding="utf-8") as f:
        for raw in f:
            line = raw.rstrip("\n")
            if not line:
                continue
            if json.loads(line).get("prev") != prev:
                return False
            prev = hashlib.sha256(line.encode("utf-8")).hexdigest()
    return True
