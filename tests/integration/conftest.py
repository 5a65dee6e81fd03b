"""Fixtures for integration tests using a fake Ranorex test executable."""

import stat
import sys
from pathlib import Path
from typing import Protocol

import pytest

if sys.platform == "win32":  # pragma: no cover
    collect_ignore_glob = ["test_*.py"]

FAKE_RUNNER = '''\
import json
import os
import sys
from pathlib import Path

REPORT = {report!r}

args = sys.argv[1:]
Path("argv.json").write_text(json.dumps(args))
print("Ranorex Test Executable")
print("cwd=" + os.getcwd())

for arg in args:
    if arg.startswith("/rf:") and REPORT is not None:
        result_file = Path(arg[len("/rf:"):])
        Path(str(result_file) + ".data").write_text(REPORT, encoding="utf-8")
        print("Report written to " + str(result_file))

sys.exit({exit_code})
'''


class CreateRunnerFn(Protocol):
    """Protocol for fake runner creation function."""

    def __call__(self, report: str | None, *, exit_code: int = 0) -> Path:
        """Create a fake test executable and return its path."""


@pytest.fixture
def tests_dir(tmp_path: Path) -> Path:
    """Directory holding the fake test executables."""
    path = tmp_path / "tests"
    path.mkdir()
    return path


@pytest.fixture
def create_runner(tests_dir: Path) -> CreateRunnerFn:
    """Return a function to create a fake test executable.

    The executable records its arguments in argv.json in its working
    directory and writes ``report`` next to the ``/rf`` result file.
    """

    def _create(report: str | None, *, exit_code: int = 0) -> Path:
        script = tests_dir / "fake_runner.py"
        script.write_text(FAKE_RUNNER.format(report=report, exit_code=exit_code))

        executable = tests_dir / "Login.sh"
        executable.write_text(
            f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n'
        )
        executable.chmod(executable.stat().st_mode | stat.S_IXUSR)
        return executable

    return _create
