import hashlib

import pytest

from pkg.ivilog import Session
from pkg.ivilog.errors import CommandTimeoutError, NoDeviceError, NonZeroExitError, OutputDirectoryError, WriteError
from pkg.ivilog.reporting import MemoryReporter, Severity

LISTING = ["List of devices attached", "emulator-5554\tdevice"]
DEVICES = ("devices",)
DUMP = ("logcat", "-d")


def make_session(fake_runner, dump):
    runner = fake_runner({DEVICES: LISTING, DUMP: dump})
    return Session(runner, MemoryReporter()), runner


def test_extract_creates_directory_and_writes_lines(fake_runner, tmp_path):
    session, runner = make_session(fake_runner, ["a", "b", "c"])
    out_dir = tmp_path / "missing" / "nested"
    outcome = session.extract(None, out_dir, "log.txt")
    assert outcome.ok
    assert outcome.path == out_dir / "log.txt"
    data = (out_dir / "log.txt").read_bytes()
    assert data == b"a\nb\nc"
    assert outcome.log_file.lines == ("a", "b", "c")
    assert outcome.log_file.sha256 == hashlib.sha256(data).hexdigest()
    assert runner.calls == [(None, DEVICES), (None, DUMP)]


def test_extract_passes_target_as_selector(fake_runner, tmp_path):
    session, runner = make_session(fake_runner, ["x"])
    outcome = session.extract("emulator-5554", tmp_path, "log.txt")
    assert outcome.ok
    assert runner.calls[-1] == ("emulator-5554", DUMP)


def test_extract_without_ready_device_never_dumps(fake_runner, tmp_path):
    session, runner = make_session(fake_runner, ["never"])
    outcome = session.extract("other-dev", tmp_path / "out", "log.txt")
    assert not outcome.ok
    assert outcome.path is None
    assert isinstance(outcome.error, NoDeviceError)
    assert outcome.error.code == "NO_DEVICE"
    assert runner.calls == [(None, DEVICES)]
    assert not (tmp_path / "out").exists()


def test_extract_overwrites_existing_file(fake_runner, tmp_path):
    (tmp_path / "log.txt").write_text("old contents that are longer\n", encoding="utf-8")
    session, _ = make_session(fake_runner, ["new"])
    assert session.extract(None, tmp_path, "log.txt").ok
    assert (tmp_path / "log.txt").read_text(encoding="utf-8") == "new"


def test_extract_keeps_utf8(fake_runner, tmp_path):
    session, _ = make_session(fake_runner, ["I/Radio: Sender → Ö3"])
    outcome = session.extract(None, tmp_path, "log.txt")
    assert outcome.path.read_text(encoding="utf-8") == "I/Radio: Sender → Ö3"


@pytest.mark.parametrize("exc", [
    NonZeroExitError(["adb", "logcat", "-d"], 1, ["error: device offline"]),
    CommandTimeoutError(["adb", "logcat", "-d"], 30),
])
def test_extract_dump_failure(fake_runner, tmp_path, exc):
    session, _ = make_session(fake_runner, exc)
    outcome = session.extract(None, tmp_path / "out", "log.txt")
    assert outcome.error is exc
    assert not (tmp_path / "out").exists()
    assert any("Error during logcat extraction" in m for m in session.reporter.messages(Severity.ERROR))


def test_extract_output_path_is_a_file(fake_runner, tmp_path):
    target = tmp_path / "taken"
    target.write_text("", encoding="utf-8")
    session, _ = make_session(fake_runner, ["a"])
    outcome = session.extract(None, target, "log.txt")
    assert isinstance(outcome.error, OutputDirectoryError)


def test_extract_directory_creation_fails(fake_runner, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    session, _ = make_session(fake_runner, ["a"])
    outcome = session.extract(None, blocker / "sub", "log.txt")
    assert isinstance(outcome.error, OutputDirectoryError)
    assert outcome.error.code == "OUTPUT_DIR"


def test_extract_write_fails(fake_runner, tmp_path):
    (tmp_path / "log.txt").mkdir()
    session, _ = make_session(fake_runner, ["a"])
    outcome = session.extract(None, tmp_path, "log.txt")
    assert isinstance(outcome.error, WriteError)
    assert outcome.error.code == "WRITE_FAILED"


def test_discover_lists_registry(fake_runner):
    session, _ = make_session(fake_runner, [])
    assert [r.identifier for r in session.discover()] == ["emulator-5554"]


def test_extract_overlong_directory_name_is_an_outcome(fake_runner, tmp_path):
    session, runner = make_session(fake_runner, ["a"])
    outcome = session.extract(None, tmp_path / ("x" * 300), "log.txt")
    assert not outcome.ok
    assert isinstance(outcome.error, OutputDirectoryError)
    assert outcome.error.code == "OUTPUT_DIR"
    assert runner.calls[-1] == (None, DUMP)
    assert any("Error during logcat extraction" in m for m in session.reporter.messages(Severity.ERROR))
