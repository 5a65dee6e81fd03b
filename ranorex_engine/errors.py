"""Errors raised while executing a Ranorex test."""


class EngineError(Exception):
    """Base class for failures of a single test execution."""


class UnsupportedScriptTypeError(EngineError, NotImplementedError):
    """Raised when an embedded test script is submitted for execution."""


class ScriptNotFoundError(EngineError, FileNotFoundError):
    """Raised when the linked test executable does not exist."""


class ProcessLaunchError(EngineError):
    """Raised when the runner process cannot be started."""


class ReportParseError(EngineError):
    """Raised when the runner's result report is missing or unreadable."""
