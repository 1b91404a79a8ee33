"""Trigger event configuration."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

Intrinsic = Dict[str, Any]


class SnsEventConfig(BaseModel):
    """Topic trigger, either a topic owned by the service or an existing one referenced by ARN."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    topic_name: Optional[str] = Field(default=None, alias="topicName")
    display_name: Optional[str] = Field(default=None, alias="displayName")
    filter_policy: Dict[str, List[Any]] = Field(
        default_factory=dict,
        alias="filterPolicy",
        description="Message attribute name mapped to the allowed values.",
    )
    arn: Optional[Union[str, Intrinsic]] = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"topicName": value}
        return value

    @model_validator(mode="after")
    def _require_topic(self) -> "SnsEventConfig":
        if self.topic_name is None and self.arn is None:
            raise ValueError("sns events need a topicName or an arn.")
        if self.topic_name is None and isinstance(self.arn, str):
            if ":" not in self.arn:
                raise ValueError(f"Cannot derive a topic name from arn {self.arn!r}.")
            self.topic_name = self.arn.rsplit(":", 1)[1]
        if self.topic_name is None:
            raise ValueError("sns events referencing an arn through an intrinsic need a topicName.")
        return self

    @property
    def is_existing(self) -> bool:
        return self.arn is not None


class S3EventConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    bucket: str = Field(..., min_length=1)
    event: str = Field(default="s3:ObjectCreated:*")

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"bucket": value}
        return value


class ScheduleEventConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rate: str = Field(..., min_length=1, description="rate(...) or cron(...) expression.")
    enabled: bool = Field(default=True)

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"rate": value}
        return value


class StreamEventConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    arn: str = Field(..., min_length=1)
    type: Optional[str] = Field(default=None, description="dynamodb or kinesis; derived from the arn if omitted.")

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"arn": value}
        return value

    @model_validator(mode="after")
    def _derive_type(self) -> "StreamEventConfig":
        if self.type is None:
            parts = self.arn.split(":")
            if len(parts) < 3 or parts[2] not in ("dynamodb", "kinesis"):
                raise ValueError(f"Cannot derive a stream type from arn {self.arn!r}.")
            self.type = parts[2]
        return self

    @property
    def stream_name(self) -> str:
        """Table or stream name embedded in the arn."""
        resource = self.arn.split(":", 5)[-1]
        segments = resource.split("/")
        if self.type == "dynamodb":
            return segments[1] if len(segments) > 1 else segments[0]
        return segments[-1]


class HttpEventConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str = Field(..., description="Resource path, e.g. users/{id}.")
    method: str = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            method, _, path = value.strip().partition(" ")
            return {"method": method, "path": path.strip()}
        return value

    @property
    def normalized_path(self) -> str:
        return self.path.strip("/")


EVENT_MODELS: Dict[str, type[BaseModel]] = {
    "sns": SnsEventConfig,
    "s3": S3EventConfig,
    "schedule": ScheduleEventConfig,
    "stream": StreamEventConfig,
    "http": HttpEventConfig,
}


class EventConfig(BaseModel):
    """A single ``{kind: payload}`` entry of a function's ``events`` list."""

    kind: str
    settings: Union[SnsEventConfig, S3EventConfig, ScheduleEventConfig, StreamEventConfig, HttpEventConfig]

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, value: Any) -> Any:
        if isinstance(value, dict) and set(value) == {"kind", "settings"}:
            value = {value["kind"]: value["settings"]}
        if not isinstance(value, dict) or len(value) != 1:
            raise ValueError("Each event must be a mapping with exactly one event kind.")
        kind, payload = next(iter(value.items()))
        model = EVENT_MODELS.get(kind)
        if model is None:
            available = ", ".join(sorted(EVENT_MODELS))
            raise ValueError(f"Unknown event kind '{kind}'. Available: {available}")
        if isinstance(payload, model):
            return {"kind": kind, "settings": payload}
        return {"kind": kind, "settings": model.model_validate(payload)}
