"""Shared pydantic base for request-side models."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable model that rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")
