"""Models for test execution results."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Literal


class TestStatus(IntEnum):
    """Execution status reported back to the test management system.

    Values are the host's execution status ids.
    """

    __test__ = False

    FAILED = 1
    PASSED = 2
    NOT_RUN = 3
    NOT_APPLICABLE = 4
    BLOCKED = 5
    CAUTION = 6


@dataclass(frozen=True, kw_only=True)
class StepRecord:
    """One step of a test run, built from a report item."""

    position: int
    description: str
    actual_result: str = ""
    expected_result: str = ""
    sample_data: str = ""
    execution_status: TestStatus = TestStatus.NOT_RUN


@dataclass(frozen=True, kw_only=True)
class ExecutionResult:
    """Completed test run as returned to the caller."""

    runner_name: str
    runner_test_name: str
    start_date: datetime
    end_date: datetime
    execution_status: TestStatus
    runner_message: str
    runner_stack_trace: str
    steps: Sequence[StepRecord] = field(default_factory=tuple)
    format: Literal["plain_text"] = "plain_text"

    @property
    def duration(self) -> float:
        """Wall-clock duration of the runner process in seconds."""
        return (self.end_date - self.start_date).total_seconds()
