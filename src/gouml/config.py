"""Configuration for gouml.

Extraction itself takes no settings; configuration only covers the
external renderer and logging:
- renderer_url: mermaid.ink compatible server used to produce images
- output_format: svg or png
- theme: Mermaid theme name passed to the renderer
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

OUTPUT_FORMATS = ("svg", "png")


class Settings(BaseModel):
    """gouml settings."""

    renderer_url: str = Field(
        default="https://mermaid.ink",
        description="Base URL of the Mermaid rendering server",
    )
    output_format: str = Field(default="svg", description="Rendered artifact format")
    theme: Optional[str] = Field(default="default", description="Mermaid theme name")
    timeout: float = Field(default=30.0, gt=0, description="Renderer timeout in seconds")
    log_level: str = Field(default="WARNING", description="Root logging level")

    @field_validator("output_format", mode="before")
    def _check_format(cls, value: str) -> str:
        value = str(value).lower()
        if value not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}")
        return value

    @field_validator("log_level", mode="before")
    def _upper_level(cls, value: str) -> str:
        return str(value).upper()


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load configuration from YAML if provided, otherwise use defaults."""
    path = config_path or Path.cwd() / "config.yaml"
    if path.exists():
        data = yaml.safe_load(path.read_text()) or {}
    else:
        data = {}
    return Settings(**data)
