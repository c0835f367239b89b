"""Configuration parsing for vsysc.yaml"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from vsysc.exceptions import ConfigError

CONFIG_FILENAME = "vsysc.yaml"


class Settings(BaseModel):
    """Interpreter options"""

    handler_timeout: Optional[float] = Field(
        default=30.0, gt=0, description="Seconds a custom keyword may take; null disables"
    )
    missing_import: Literal["error", "ignore"] = Field(
        default="error", description="What IM does when the export is unknown"
    )
    remove_keyword: Literal["error", "ignore"] = Field(
        default="error", description="What the reserved RM keyword does"
    )
    variables: dict[str, str] = Field(
        default_factory=dict, description="Seed values for the global variable store"
    )
    plugins: list[str] = Field(
        default_factory=list, description="Modules that register custom keywords"
    )

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """Load settings from yaml file; a missing file gives defaults."""
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping at the top level")

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid config {path}: {exc}") from exc


def find_config_file(start: Path | None = None) -> Path | None:
    """Find vsysc.yaml in the start directory or its parents."""
    cwd = start or Path.cwd()
    for parent in [cwd] + list(cwd.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None
