"""Exceptions raised while scaffolding a project."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all pipeline failures."""

    stage = "scaffold"


class DirectoryCreationFailed(ScaffoldError):
    """Raised when a directory inside the project cannot be created."""

    stage = "prepare"

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to create directory {path}: {cause}")


class DownloadFailed(ScaffoldError):
    """Raised when the template archive cannot be downloaded."""

    stage = "download"

    def __init__(
        self,
        url: str,
        status: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.status = status
        self.cause = cause
        if status is not None:
            detail = f"HTTP {status}"
        else:
            detail = str(cause)
        super().__init__(f"Download failed for {url}: {detail}")


class InvalidArchive(ScaffoldError):
    """Raised when the downloaded file is not a readable zip archive."""

    stage = "extract"

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Downloaded template {path.name} is not a valid archive: {cause}")


class VariantNotFound(ScaffoldError):
    """Raised when no archive entry lives under the requested variant folder."""

    stage = "extract"

    def __init__(self, selector: str) -> None:
        self.selector = selector
        super().__init__(
            f"The specified chip/board '{selector}' does not exist in the template"
        )


class UnsafeArchivePath(ScaffoldError):
    """Raised when an archive entry would be written outside the project."""

    stage = "extract"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Archive entry escapes the project directory: {path}")


class ExtractionFailed(ScaffoldError):
    """Raised when an extracted file cannot be written."""

    stage = "extract"

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")


class ConfigCopyFailed(ScaffoldError):
    """Raised when keyboard.toml or vial.json cannot be copied in."""

    stage = "overlay"

    def __init__(self, which: str, cause: Exception) -> None:
        self.which = which
        self.cause = cause
        super().__init__(f"Failed to copy {which} to project directory: {cause}")


class PlaceholderRewriteFailed(ScaffoldError):
    """Raised when a template file cannot be rewritten."""

    stage = "rewrite"

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to replace placeholders in {path}: {cause}")


class KeyboardConfigError(ScaffoldError):
    """Raised when keyboard.toml cannot be turned into project info."""

    stage = "configure"

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path.name}: {reason}")
