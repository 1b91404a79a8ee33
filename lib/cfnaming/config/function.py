"""Function configuration."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .events import EventConfig


class FunctionConfig(BaseModel):
    """A deployable function and the events that trigger it."""

    model_config = ConfigDict(extra="ignore")

    handler: str = Field(..., min_length=1, description="module.function entry point.")
    name: Optional[str] = Field(default=None, description="Explicit physical function name.")
    events: List[EventConfig] = Field(default_factory=list)

    @field_validator("events", mode="before")
    def _coerce_missing_events(cls, value: Any) -> Any:
        return value or []
