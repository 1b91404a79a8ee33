"""Configuration models for service definitions."""

from __future__ import annotations

from .base import DeploymentContext, ProviderConfig
from .events import (
    EVENT_MODELS,
    EventConfig,
    HttpEventConfig,
    S3EventConfig,
    ScheduleEventConfig,
    SnsEventConfig,
    StreamEventConfig,
)
from .function import FunctionConfig
from .service import ServiceConfig, apply_overrides, load_service_config

__all__ = [
    "DeploymentContext",
    "EVENT_MODELS",
    "EventConfig",
    "FunctionConfig",
    "HttpEventConfig",
    "ProviderConfig",
    "S3EventConfig",
    "ScheduleEventConfig",
    "ServiceConfig",
    "SnsEventConfig",
    "StreamEventConfig",
    "apply_overrides",
    "load_service_config",
]
