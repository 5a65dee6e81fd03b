"""Ranorex automation engine: runs a linked test and reports its outcome."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from pathlib import Path, PureWindowsPath

from ranorex_engine.arguments import (
    build_arguments,
    collect_parameters,
    split_script_reference,
)
from ranorex_engine.descriptor import (
    RANOREX_DESCRIPTOR,
    AutomationEngine,
    EngineDescriptor,
)
from ranorex_engine.errors import ScriptNotFoundError, UnsupportedScriptTypeError
from ranorex_engine.models.request import ExecutionRequest
from ranorex_engine.models.result import ExecutionResult
from ranorex_engine.paths import resolve_placeholders
from ranorex_engine.process import run_process
from ranorex_engine.report import parse_report, report_data_path
from ranorex_engine.settings import EngineSettings
from ranorex_engine.status import build_steps, map_result

log = logging.getLogger(__name__)

RESULT_FILE_SUFFIX = ".rxlog"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class EngineStatus(Enum):
    """Health of the engine as reported to the host."""

    OK = auto()
    ERROR = auto()


class RunPhase(Enum):
    """Stage of the execution currently in progress."""

    IDLE = auto()
    PREPARING = auto()
    LAUNCHING = auto()
    AWAITING_EXIT = auto()
    PARSING_RESULT = auto()
    COMPLETED = auto()
    ERROR = auto()


@dataclass(frozen=True, kw_only=True)
class PreparedRun:
    """Everything needed to launch the runner for one request."""

    executable: Path
    working_dir: Path
    result_file: Path
    arguments: str
    runner_test_name: str


@dataclass(kw_only=True)
class RanorexEngine(AutomationEngine):
    """Executes linked Ranorex test executables one request at a time."""

    descriptor: EngineDescriptor = RANOREX_DESCRIPTOR
    status: EngineStatus = field(default=EngineStatus.OK, init=False)
    phase: RunPhase = field(default=RunPhase.IDLE, init=False)

    async def start_execution(
        self,
        request: ExecutionRequest,
        settings: EngineSettings,
    ) -> ExecutionResult:
        """Run the test referenced by the request and translate its report.

        Args:
            request: The test run to execute
            settings: Result folder and trace logging flag for this run

        Returns:
            The populated execution result

        Raises:
            EngineError: If the script is embedded or missing, the runner
                cannot start, or its report cannot be read. The failure is
                logged and the engine status set to error before re-raising.

        """
        self.status = EngineStatus.OK
        self.phase = RunPhase.IDLE
        try:
            self._enter(RunPhase.PREPARING)
            self._trace(settings, "Starting test execution")
            prepared = self._prepare(request, settings)

            self._enter(RunPhase.LAUNCHING)
            self._trace(
                settings,
                "Executing %s test located at %s",
                self.descriptor.external_system_name,
                prepared.executable,
            )
            # Process start and exit are awaited within run_process.
            self._enter(RunPhase.AWAITING_EXIT)
            output = await run_process(
                prepared.executable, prepared.working_dir, prepared.arguments
            )
            if output.return_code != 0:
                self._trace(
                    settings,
                    "Runner exited with code %s, outcome is taken from its report",
                    output.return_code,
                )

            self._enter(RunPhase.PARSING_RESULT)
            report = parse_report(report_data_path(prepared.result_file))
            steps, execution_status = build_steps(
                report.items, map_result(report.result)
            )
            self._trace(
                settings,
                "Test finished with result %s (%d step(s))",
                report.result,
                len(steps),
            )

            transcript = (
                f"Executing: {prepared.executable} in '{prepared.working_dir}' "
                f"with arguments '{prepared.arguments}'\n"
            )
            result = ExecutionResult(
                runner_name=request.runner_name or self.descriptor.name,
                runner_test_name=prepared.runner_test_name,
                start_date=output.start_date,
                end_date=output.end_date,
                execution_status=execution_status,
                runner_message=report.summary,
                runner_stack_trace=transcript + output.stdout,
                steps=steps,
            )
        except BaseException as e:
            log.exception("Test execution failed: %s", e)
            self.status = EngineStatus.ERROR
            self._enter(RunPhase.ERROR)
            raise

        self.status = EngineStatus.OK
        self._enter(RunPhase.COMPLETED)
        return result

    def _prepare(
        self, request: ExecutionRequest, settings: EngineSettings
    ) -> PreparedRun:
        """Validate the request and create its output folder."""
        if request.parameters is None:
            self._trace(settings, "Test Run has no parameters")
        else:
            self._trace(settings, "Test Run has parameters")
        parameters = collect_parameters(request.parameters)
        for name, value in parameters.items():
            self._trace(settings, "Adding test run parameter %s = %s", name, value)

        if request.attachment_type != "url":
            raise UnsupportedScriptTypeError(
                f"The {self.descriptor.external_system_name} automation engine "
                "only supports linked test scripts"
            )

        raw_path, extra_args = split_script_reference(request.filename_or_url)
        executable = Path(resolve_placeholders(raw_path))
        if not executable.is_file():
            raise ScriptNotFoundError(
                f"Unable to find a {self.descriptor.external_system_name} "
                f"test at {executable}"
            )

        stem = request.result_file_stem
        timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        output_dir = settings.result_path / f"{timestamp}_{stem}"
        output_dir.mkdir(parents=True, exist_ok=True)
        result_file = output_dir / f"{stem}{RESULT_FILE_SUFFIX}"

        return PreparedRun(
            executable=executable,
            working_dir=executable.parent,
            result_file=result_file,
            arguments=build_arguments(str(result_file), parameters, extra_args),
            runner_test_name=PureWindowsPath(PureWindowsPath(raw_path).stem).stem,
        )

    def _enter(self, phase: RunPhase) -> None:
        log.debug("Engine phase %s -> %s", self.phase.name, phase.name)
        self.phase = phase

    @staticmethod
    def _trace(settings: EngineSettings, msg: str, *args: object) -> None:
        if settings.trace_logging:
            log.info(msg, *args)
