import os
import stat
from pathlib import Path

import pytest

from pkg.ivilog.errors import IviLogError
from pkg.ivilog.models import CommandInvocation, ExecutionResult


class FakeRunner:
    """Answers run() from a table keyed by the command args."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def run(self, device, args):
        args = tuple(args)
        self.calls.append((device, args))
        answer = self.responses[args]
        if isinstance(answer, IviLogError):
            raise answer
        inv = CommandInvocation(tool="adb", args=args, device=device)
        return ExecutionResult(invocation=inv, lines=tuple(answer), returncode=0)


@pytest.fixture
def fake_runner():
    return FakeRunner


@pytest.fixture
def make_tool(tmp_path):
    """Write an executable /bin/sh script standing in for adb."""
    def _make(body: str, name: str = "fake-adb") -> str:
        path = Path(tmp_path) / name
        path.write_text("#!/bin/sh\n" + body + "\n", encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)
    return _make


posix_only = pytest.mark.skipif(os.name != "posix", reason="fake adb is a shell script")
