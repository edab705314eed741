from __future__ import annotations

import hashlib
from pathlib import Path

from ..errors import OutputDirectoryError, WriteError
from ..models import LogFile

DUMP_ARGS = ("logcat", "-d")


class LogcatDump:
    """Dump the device log buffer once and save it as a UTF-8 text file.

    run(session) raises IviLogError on failure; the session turns that into an Outcome.
    """

    name = "logcat"

    def __init__(self, target: str | None, output_dir: str | Path, file_name: str) -> None:
        self.target = target
        self.output_dir = Path(output_dir)
        self.file_name = file_name

    def run(self, session) -> LogFile:
        result = session.runner.run(self.target, DUMP_ARGS)
        session.reporter.info(f"Logcat data retrieved, {len(result.lines)} lines.")
        self._ensure_dir(session)
        out = self.output_dir / self.file_name
        return self._write(out, result.lines)

    # internal helpers
    def _ensure_dir(self, session) -> None:
        d = self.output_dir
        try:
            if d.is_dir():
                return
            if d.exists():
                session.reporter.error(f"The specified path is not a directory: {d}")
                raise OutputDirectoryError(str(d), "not a directory")
            session.reporter.info(f"Output directory does not exist, attempting to create: {d}")
            d.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            # is_dir()/exists() re-raise EACCES, ENAMETOOLONG and the like
            session.reporter.error(f"Failed to create output directory: {d}")
            raise OutputDirectoryError(str(d), exc.strerror or str(exc)) from exc
        session.reporter.info(f"Output directory created: {d}")

    def _write(self, out: Path, lines: tuple[str, ...]) -> LogFile:
        # lines are fully buffered, so the file is written in one call
        data = "\n".join(lines).encode("utf-8")
        try:
            out.write_bytes(data)
        except OSError as exc:
            raise WriteError(str(out), exc.strerror or str(exc)) from exc
        return LogFile(path=out, lines=tuple(lines), sha256=hashlib.sha256(data).hexdigest())
