"""User-tunable settings for rmkit."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from rmkit.models.project import TemplateRepository

PLACEHOLDER_TOKEN = "{{ project_name }}"


class RmkitSettings(BaseModel):
    """Settings for template acquisition and materialization."""

    template: TemplateRepository = Field(default_factory=TemplateRepository)
    boards: dict[str, str] = Field(
        default_factory=dict, description="Board name -> chip identifier"
    )
    placeholder_token: str = Field(default=PLACEHOLDER_TOKEN)
    placeholder_extensions: list[str] = Field(
        default_factory=lambda: [".toml", ".json"],
        description="File extensions scanned for placeholders",
    )
    chunk_size: int = Field(default=64 * 1024, gt=0, description="Download chunk size in bytes")
    timeout: float = Field(default=30.0, gt=0)

    @classmethod
    def from_yaml(cls, path: Path) -> "RmkitSettings":
        """Load settings from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def load(cls, path: Path | None = None) -> "RmkitSettings":
        """Load settings from ``path`` if given, otherwise use defaults."""
        if path is None:
            return cls()
        return cls.from_yaml(path)
