"""CLI entry point for running a single Ranorex test."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from ranorex_engine.engine import RanorexEngine
from ranorex_engine.errors import EngineError
from ranorex_engine.models.request import ExecutionRequest, TestRunParameter
from ranorex_engine.models.result import ExecutionResult, TestStatus
from ranorex_engine.settings import EngineSettings

STATUS_SYMBOLS = {
    TestStatus.PASSED: "✓",
    TestStatus.FAILED: "✗",
    TestStatus.CAUTION: "!",
    TestStatus.BLOCKED: "■",
    TestStatus.NOT_RUN: "-",
    TestStatus.NOT_APPLICABLE: "·",
}

FAILING_STATUSES = frozenset({TestStatus.FAILED, TestStatus.BLOCKED})


def log_result_summary(log: logging.Logger, result: ExecutionResult) -> None:
    """Log a formatted summary of the execution result and its steps."""
    log.info("=" * 80)
    log.info("Test Result Summary:")
    log.info("=" * 80)

    log.info(
        "%s %s: %s (%.2fs)",
        STATUS_SYMBOLS[result.execution_status],
        result.runner_test_name,
        result.execution_status.name,
        result.duration,
    )
    for step in result.steps:
        log.info(
            "  %d. %s %s: %s",
            step.position,
            STATUS_SYMBOLS[step.execution_status],
            step.description,
            step.actual_result,
        )
    if result.runner_message:
        log.info("  Message: %s", result.runner_message.strip())


def parse_parameters(values: Sequence[str]) -> Sequence[TestRunParameter]:
    """Parse NAME=VALUE strings into test run parameters."""
    parameters: list[TestRunParameter] = []
    for value in values:
        name, separator, parameter_value = value.partition("=")
        if not separator:
            raise argparse.ArgumentTypeError(
                f"Invalid parameter '{value}', expected NAME=VALUE"
            )
        parameters.append(TestRunParameter(name=name, value=parameter_value))
    return parameters


def format_output(result: ExecutionResult) -> dict[str, Any]:
    """Format an execution result for JSON output."""
    return {
        "runner_name": result.runner_name,
        "runner_test_name": result.runner_test_name,
        "status": result.execution_status.name,
        "status_id": int(result.execution_status),
        "start_date": result.start_date.isoformat(),
        "end_date": result.end_date.isoformat(),
        "duration": result.duration,
        "message": result.runner_message,
        "format": result.format,
        "steps": [
            {
                "position": step.position,
                "description": step.description,
                "expected_result": step.expected_result,
                "actual_result": step.actual_result,
                "status": step.execution_status.name,
                "status_id": int(step.execution_status),
            }
            for step in result.steps
        ],
    }


async def run(request: ExecutionRequest, settings_json: str) -> int:
    """Execute the test and return the exit code."""
    log = logging.getLogger("ranorex_engine")

    settings = EngineSettings(**json.loads(settings_json))
    engine = RanorexEngine()

    log.info(
        "Running %s (%s)", request.filename_or_url, request.result_file_stem
    )
    try:
        result = await engine.start_execution(request, settings)
    except EngineError as e:
        log.error("Execution failed: %s", e)
        return 2

    log_result_summary(log, result)
    print(json.dumps(format_output(result), indent=2))

    return 1 if result.execution_status in FAILING_STATUSES else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Run a Ranorex test executable")
    parser.add_argument(
        "--script",
        required=True,
        help="Path of the test executable, optionally followed by '|' and arguments",
    )
    parser.add_argument(
        "--test-set-id",
        type=int,
        required=True,
        help="Test set identifier, used to name the result folder",
    )
    parser.add_argument(
        "--test-case-id",
        type=int,
        required=True,
        help="Test case identifier, used to name the result folder",
    )
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Test run parameter (repeatable)",
    )
    parser.add_argument(
        "--runner-name",
        default=None,
        help="Runner display name (defaults to the engine name)",
    )
    parser.add_argument(
        "--embedded",
        action="store_true",
        help="Treat the script as an embedded script instead of a linked file",
    )
    parser.add_argument(
        "--settings",
        required=True,
        help='JSON engine settings, e.g. {"result_path": "C:/Results"}',
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        parameters = parse_parameters(args.param)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    request = ExecutionRequest(
        filename_or_url=args.script,
        attachment_type="file" if args.embedded else "url",
        parameters=parameters or None,
        test_set_id=args.test_set_id,
        test_case_id=args.test_case_id,
        runner_name=args.runner_name,
    )

    exit_code = asyncio.run(run(request, args.settings))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
