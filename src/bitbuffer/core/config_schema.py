"""Pydantic schema for BITBUFFER configuration validation.

Mirrors the YAML structure in config/default.yaml. Used when
``validate=True`` is passed to ``BitBufferConfig.load()``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ValueRange = Literal[
    2, 4, 8, 16, 32, 64, 128, 256, 512, 1024, 2048, 4096, 8192, 16384, 32768
]

# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


class SystemConfig(BaseModel):
    name: str = "BITBUFFER"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    validate_config: bool = False
    log_file: str | None = None
    log_json: bool = False


class BufferSection(BaseModel):
    range: ValueRange = 256
    capacity: int = Field(default=64, ge=1)
    overflow: Literal["clamp_max", "clamp_min", "reject"] = "reject"


class ExerciseSection(BaseModel):
    seed: int | None = 42
    max_capacity: int = Field(default=18, ge=2)
    ranges: list[ValueRange] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class BitBufferRootConfig(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    buffer: BufferSection = Field(default_factory=BufferSection)
    exercise: ExerciseSection = Field(default_factory=ExerciseSection)

    model_config = {"extra": "allow"}


class BitBufferConfigSchema(BaseModel):
    """Top-level wrapper matching YAML root key ``bitbuffer:``."""

    bitbuffer: BitBufferRootConfig

    model_config = {"extra": "allow"}


def validate_config(cfg_dict: dict) -> BitBufferConfigSchema:
    """Validate a raw config dict (e.g. from OmegaConf) against the schema.

    Raises ``pydantic.ValidationError`` on invalid config.
    """
    return BitBufferConfigSchema.model_validate(cfg_dict)
