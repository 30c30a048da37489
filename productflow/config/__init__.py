"""Configuration helpers for ProductFlow conversion jobs.

A job file bundles the pricing parameters, tag set, manual mapping
overrides and export settings for one conversion, so the same adjustments
can be applied to a new upload without retyping them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from productflow.core.errors import ConfigError
from productflow.services.catalog.pricing import PricingParameters


class ExportSettings(BaseModel):
    """Output format and optional file stem."""

    model_config = ConfigDict(extra="allow")

    format: Literal["csv", "xlsx", "json"] = "csv"
    file_name: Optional[str] = None


class JobConfig(BaseModel):
    """Complete job file model."""

    model_config = ConfigDict(extra="allow")

    pricing: PricingParameters = Field(default_factory=PricingParameters)
    tags: List[str] = Field(default_factory=list)
    mapping: Dict[str, Optional[str]] = Field(default_factory=dict)
    export: ExportSettings = Field(default_factory=ExportSettings)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("mapping", mode="before")
    @classmethod
    def _mapping_dict(cls, value: Any) -> Any:
        return {} if value is None else value


def load_job_config(path: str | Path) -> JobConfig:
    """Load and validate a job file.

    Raises:
        ConfigError: When the file is missing, is not a YAML mapping, or
            fails validation.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Job configuration not found: {config_path}")

    yaml = YAML(typ="safe")
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.load(fh) or {}
    except YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Job configuration must be a mapping")

    try:
        return JobConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid job configuration {config_path}: {exc}") from exc


__all__ = [
    "ExportSettings",
    "JobConfig",
    "load_job_config",
]
