"""Base configuration models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DeploymentContext(BaseModel):
    """Service-wide values that scope generated names for one generation run."""

    model_config = ConfigDict(frozen=True)

    service: str = Field(..., min_length=1, description="Service name.")
    stage: str = Field(default="dev", min_length=1, description="Deployment stage.")
    region: str = Field(default="us-east-1", min_length=1, description="Target region.")
    account_id: Optional[str] = Field(default=None, description="Account the stack is deployed to.")


class ProviderConfig(BaseModel):
    """The ``provider`` block of a service configuration."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(default="aws", description="Cloud provider identifier.")
    runtime: Optional[str] = Field(default=None, description="Default function runtime.")
    stage: str = Field(default="dev", min_length=1, description="Default deployment stage.")
    region: str = Field(default="us-east-1", min_length=1, description="Default deployment region.")
    version_functions: bool = Field(
        default=True,
        alias="versionFunctions",
        description="Whether function versions are published on deploy.",
    )
