"""Models describing an automated test run handed over by the host."""

from collections.abc import Sequence
from typing import Literal, TypeAlias

from pydantic import Field

from ranorex_engine.models.base import Model

AttachmentType: TypeAlias = Literal["url", "file"]


class TestRunParameter(Model):
    """Named value passed to the test as a Ranorex global parameter."""

    __test__ = False

    name: str = Field(..., description="Parameter name (trimmed before use)")
    value: str = Field(default="", description="Parameter value, case preserved")


class ExecutionRequest(Model):
    """A single request to execute one Ranorex test."""

    filename_or_url: str = Field(
        ...,
        description=(
            "Path of the compiled test executable, optionally followed by "
            "'|' and extra command-line arguments"
        ),
    )
    attachment_type: AttachmentType = Field(
        default="url",
        description="'url' for a linked script path, 'file' for an embedded script",
    )
    parameters: Sequence[TestRunParameter] | None = Field(
        default=None, description="Test run parameters, None when there are none"
    )
    test_set_id: int = Field(..., description="Test set the run belongs to")
    test_case_id: int = Field(..., description="Test case being executed")
    runner_name: str | None = Field(
        default=None, description="Runner display name assigned by the host"
    )
    project_id: int | None = Field(default=None, description="Host project id")

    @property
    def result_file_stem(self) -> str:
        """Name shared by the output folder suffix and the result file."""
        return f"TS{self.test_set_id}_TC{self.test_case_id}"
