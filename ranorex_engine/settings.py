"""Configuration supplied to the engine for each execution."""

from pathlib import Path

from pydantic import BaseModel


class EngineSettings(BaseModel):
    """Settings for the Ranorex automation engine."""

    result_path: Path
    trace_logging: bool = False
