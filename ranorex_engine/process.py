"""Run a test executable and capture its output."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from ranorex_engine.arguments import split_arguments
from ranorex_engine.errors import ProcessLaunchError

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ProcessOutput:
    """Captured output and timing of a finished runner process."""

    stdout: str
    start_date: datetime
    end_date: datetime
    return_code: int | None


async def run_process(
    executable: Path,
    working_dir: Path,
    arguments: str,
) -> ProcessOutput:
    """Start the executable, read all of its stdout and wait for it to exit.

    The exit code is returned for information only. The runner's report, not
    its exit code, decides the outcome of a test.

    Args:
        executable: Test executable to start (no shell is involved)
        working_dir: Directory the process runs in
        arguments: Composed argument string, see ``build_arguments``

    Returns:
        The decoded stdout plus start/end timestamps around the process

    Raises:
        ProcessLaunchError: If the process could not be started

    """
    start_date = datetime.now(timezone.utc)
    try:
        process = await asyncio.create_subprocess_exec(
            str(executable),
            *split_arguments(arguments),
            cwd=working_dir,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ProcessLaunchError(f"Unable to start {executable}: {e}") from e

    try:
        stdout, _ = await process.communicate()
    finally:
        if process.returncode is None:
            log.debug("Killing runner process %s", process.pid)
            process.kill()
            await process.wait()
    end_date = datetime.now(timezone.utc)

    return ProcessOutput(
        stdout=stdout.decode(errors="replace"),
        start_date=start_date,
        end_date=end_date,
        return_code=process.returncode,
    )
