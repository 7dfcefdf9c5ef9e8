"""Data models for rmkit."""

from rmkit.models.project import (
    ArchiveSource,
    ExtractionRequest,
    ProjectInfo,
    TemplateRepository,
)
from rmkit.models.settings import PLACEHOLDER_TOKEN, RmkitSettings

__all__ = [
    # Project models
    "ArchiveSource",
    "ExtractionRequest",
    "ProjectInfo",
    "TemplateRepository",
    # Settings
    "PLACEHOLDER_TOKEN",
    "RmkitSettings",
]
