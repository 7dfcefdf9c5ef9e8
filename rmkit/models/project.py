"""Models describing what to scaffold and where to get it from."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _check_selector(value: str) -> str:
    if "/" in value or "\\" in value:
        raise ValueError("variant selector must not contain path separators")
    return value


class TemplateRepository(BaseModel):
    """GitHub repository holding the firmware template."""

    host: str = Field(default="github.com")
    owner: str = Field(default="HaoboGu", description="Repository owner")
    repo: str = Field(default="rmk-template", description="Repository name")
    branch: str = Field(default="feat/rework")

    @property
    def archive_url(self) -> str:
        """Get the zip archive URL for the branch head."""
        return (
            f"https://{self.host}/{self.owner}/{self.repo}"
            f"/archive/refs/heads/{self.branch}.zip"
        )


class ArchiveSource(BaseModel):
    """Location of the template archive for a single run."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="URL to download the archive from")

    @classmethod
    def from_repository(cls, repository: TemplateRepository) -> "ArchiveSource":
        return cls(url=repository.archive_url)


class ExtractionRequest(BaseModel):
    """Which variant folder to extract and where to put it."""

    model_config = ConfigDict(frozen=True)

    destination_dir: Path
    variant_selector: str = Field(..., min_length=1)

    @field_validator("variant_selector")
    @classmethod
    def _no_separators(cls, value: str) -> str:
        return _check_selector(value)


class ProjectInfo(BaseModel):
    """Everything the pipeline needs to know about the project being created."""

    project_name: str = Field(..., min_length=1)
    target_dir: Path
    remote_folder: str = Field(..., min_length=1, description="Variant folder inside the template")
    output_dir: Path | None = Field(
        default=None, description="Directory the project folder is created in"
    )

    @field_validator("project_name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        # Project names end up in Cargo.toml and directory names
        value = value.replace(" ", "_")
        if value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError("project name must be a single directory name")
        return value

    @field_validator("remote_folder")
    @classmethod
    def _no_separators(cls, value: str) -> str:
        return _check_selector(value)

    def extraction_request(self) -> ExtractionRequest:
        return ExtractionRequest(
            destination_dir=self.target_dir, variant_selector=self.remote_folder
        )
