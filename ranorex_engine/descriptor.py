"""Identity of the automation engine and the interface hosts call into."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import UUID

from ranorex_engine.models.request import ExecutionRequest
from ranorex_engine.models.result import ExecutionResult
from ranorex_engine.settings import EngineSettings


@dataclass(frozen=True, kw_only=True)
class EngineDescriptor:
    """Metadata a host uses to register and display an automation engine."""

    author: str
    id: UUID
    name: str
    token: str
    version: str
    external_system_name: str


RANOREX_DESCRIPTOR = EngineDescriptor(
    author="step2IT GmbH",
    id=UUID("714A64BE-78F3-4D17-89BC-984B95D58E6A"),
    name="Ranorex Automation Engine",
    token="RanorexEngine",
    version="4.0.1",
    external_system_name="Ranorex",
)


class AutomationEngine(ABC):
    """Capability exposed by an automation engine to its host."""

    descriptor: EngineDescriptor

    @abstractmethod
    async def start_execution(
        self,
        request: ExecutionRequest,
        settings: EngineSettings,
    ) -> ExecutionResult:
        """Execute one automated test and return its populated result.

        Args:
            request: The test run to execute
            settings: Configuration snapshot for this execution

        Returns:
            The completed execution result

        Raises:
            EngineError: If the test could not be executed or its report read

        """
