from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, field_validator


class TapConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    indent: str = "    "
    stream: Literal["stdout", "stderr"] = "stdout"
    todo_reason: str = "-"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @field_validator("indent")
    @classmethod
    def indent_must_be_whitespace(cls, v: str) -> str:
        if not v or v.strip():
            raise ValueError("indent must be a non-empty run of whitespace")
        if "\n" in v or "\r" in v:
            raise ValueError("indent must not contain line breaks")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.upper()
        return v


def load_config(path: Path) -> TapConfig:
    """Load and validate a tapline config from a YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return TapConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return TapConfig(**raw)
