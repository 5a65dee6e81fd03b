"""Translation of Ranorex results and levels into test statuses."""

from collections.abc import Iterable, Mapping, Sequence

from ranorex_engine.models.result import StepRecord, TestStatus
from ranorex_engine.report import ReportItem

RESULT_TO_STATUS: Mapping[str, TestStatus] = {
    "Success": TestStatus.PASSED,
    "Failed": TestStatus.FAILED,
    "Error": TestStatus.FAILED,
    "Warn": TestStatus.CAUTION,
}

LEVEL_TO_STATUS: Mapping[str, TestStatus] = {
    "Success": TestStatus.PASSED,
    "Info": TestStatus.NOT_APPLICABLE,
    "Warn": TestStatus.CAUTION,
    "Failure": TestStatus.FAILED,
    "Error": TestStatus.FAILED,
}

# Run statuses a warning step may still raise to caution.
CAUTION_ESCALATES_FROM = frozenset(
    {TestStatus.PASSED, TestStatus.NOT_RUN, TestStatus.NOT_APPLICABLE}
)


def map_result(result: str) -> TestStatus:
    """Map the report's overall result code, unknown codes are blocked."""
    return RESULT_TO_STATUS.get(result, TestStatus.BLOCKED)


def map_level(level: str) -> TestStatus:
    """Map a report item level, unknown levels are not run."""
    return LEVEL_TO_STATUS.get(level, TestStatus.NOT_RUN)


def escalate(current: TestStatus, step_status: TestStatus) -> TestStatus:
    """Return the run status after a step with ``step_status`` was recorded.

    Steps only ever make a run worse: a failed step fails the run and a
    warning turns a passed (or not run / not applicable) run into caution.
    """
    if step_status is TestStatus.FAILED:
        return TestStatus.FAILED
    if step_status is TestStatus.CAUTION and current in CAUTION_ESCALATES_FROM:
        return TestStatus.CAUTION
    return current


def build_steps(
    items: Iterable[ReportItem],
    initial: TestStatus,
) -> tuple[Sequence[StepRecord], TestStatus]:
    """Turn report items into numbered steps and fold their statuses.

    Args:
        items: Report items in document order
        initial: Run status derived from the report's overall result

    Returns:
        The steps, numbered from 1, and the escalated run status

    """
    steps: list[StepRecord] = []
    status = initial

    for position, item in enumerate(items, start=1):
        step_status = map_level(item.level)
        status = escalate(status, step_status)
        steps.append(
            StepRecord(
                position=position,
                description=item.category,
                actual_result=item.message,
                execution_status=step_status,
            )
        )

    return steps, status
