"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, copyrec.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class CodecConfig(BaseModel):
    """[codec] section."""

    model_config = {"frozen": True}

    base_offset: int = 0
    strict_length: bool = False

    @field_validator("base_offset")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            msg = "base_offset must be non-negative"
            raise ValueError(msg)
        return value


class IoConfig(BaseModel):
    """[io] section."""

    model_config = {"frozen": True}

    encoding: str = "utf-8"
    newline: str = "\n"
    skip_blank_lines: bool = True


class CopyrecConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    codec: CodecConfig = Field(default_factory=CodecConfig)
    io: IoConfig = Field(default_factory=IoConfig)
