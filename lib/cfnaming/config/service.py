"""Top-level service configuration."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cfnaming.utils import load_yaml_file

from .base import DeploymentContext, ProviderConfig
from .function import FunctionConfig


class ServiceConfig(BaseModel):
    """A service definition: provider defaults plus its functions."""

    model_config = ConfigDict(extra="ignore")

    service: str = Field(..., min_length=1, description="Service name.")
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    functions: Dict[str, FunctionConfig] = Field(default_factory=dict)

    @field_validator("service", mode="before")
    def _unwrap_service_name(cls, value: Any) -> Any:
        # `service: {name: foo}` is accepted alongside the plain string form.
        if isinstance(value, dict) and "name" in value:
            return value["name"]
        return value

    @field_validator("functions", mode="before")
    def _coerce_empty_functions(cls, value: Any) -> Any:
        return value or {}

    def deployment_context(
        self,
        *,
        stage: str | None = None,
        region: str | None = None,
        account_id: str | None = None,
    ) -> DeploymentContext:
        return DeploymentContext(
            service=self.service,
            stage=stage or self.provider.stage,
            region=region or self.provider.region,
            account_id=account_id,
        )

    def function_name(self, key: str, stage: str | None = None) -> str:
        """Physical name of a function, defaulting to ``{service}-{stage}-{key}``."""
        function = self.functions[key]
        if function.name:
            return function.name
        return f"{self.service}-{stage or self.provider.stage}-{key}"


def apply_overrides(config: dict, overrides: Mapping[str, object]) -> dict:
    """Return a copy of ``config`` with dotted-key overrides applied."""
    updated = copy.deepcopy(config)
    for key, value in overrides.items():
        parts = key.split(".")
        cursor = updated
        for idx, part in enumerate(parts):
            is_last = idx == len(parts) - 1
            if part.isdigit():
                index = int(part)
                if not isinstance(cursor, list):
                    raise TypeError(f"Cannot index into non-list at {'.'.join(parts[:idx])}")
                while len(cursor) <= index:
                    cursor.append({})
                if is_last:
                    cursor[index] = value
                else:
                    if not isinstance(cursor[index], (dict, list)):
                        cursor[index] = {}
                    cursor = cursor[index]
            else:
                if isinstance(cursor, list):
                    raise TypeError(f"Attempting to use key '{part}' within a list at {'.'.join(parts[:idx])}")
                if is_last:
                    cursor[part] = value
                else:
                    if not isinstance(cursor.get(part), (dict, list)):
                        cursor[part] = [] if parts[idx + 1].isdigit() else {}
                    cursor = cursor[part]
    return updated


def load_service_config(path: Path, overrides: Optional[Mapping[str, object]] = None) -> ServiceConfig:
    """Load a service YAML file, apply overrides and validate it."""
    raw_config = load_yaml_file(path)
    if not isinstance(raw_config, dict):
        raise ValueError(f"{path} does not contain a mapping.")
    if overrides:
        raw_config = apply_overrides(raw_config, overrides)
    return ServiceConfig.model_validate(raw_config)
