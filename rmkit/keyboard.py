"""Derive project information from a user's keyboard.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rmkit.errors import KeyboardConfigError
from rmkit.models.project import ProjectInfo


class KeyboardSection(BaseModel):
    """The ``[keyboard]`` table. Only the fields rmkit needs are read."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    board: str | None = None
    chip: str | None = None


class KeyboardToml(BaseModel):
    """Top-level layout of keyboard.toml."""

    model_config = ConfigDict(extra="allow")

    keyboard: KeyboardSection
    matrix: dict[str, Any] | None = None
    split: dict[str, Any] | None = None


def read_keyboard_toml(path: Path) -> KeyboardToml:
    """Read and parse keyboard.toml."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise KeyboardConfigError(path, f"failed to read configuration file: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise KeyboardConfigError(path, f"failed to parse: {e}") from e

    try:
        return KeyboardToml.model_validate(data)
    except ValidationError as e:
        raise KeyboardConfigError(path, f"invalid configuration: {e}") from e


def resolve_chip(config: KeyboardToml, boards: dict[str, str], path: Path) -> str:
    """Get the chip from ``keyboard.chip`` or by looking up ``keyboard.board``."""
    board, chip = config.keyboard.board, config.keyboard.chip
    if board and chip:
        raise KeyboardConfigError(path, "'board' and 'chip' cannot both be specified")
    if chip:
        return chip
    if board:
        if board not in boards:
            raise KeyboardConfigError(path, f"Unsupported board '{board}'")
        return boards[board]
    raise KeyboardConfigError(path, "Either 'board' or 'chip' must be specified")


def resolve_variant(config: KeyboardToml, chip: str, path: Path) -> str:
    """Get the template folder: ``<chip>`` for a matrix, ``<chip>_split`` for splits."""
    has_matrix = config.matrix is not None
    has_split = config.split is not None
    if has_matrix and has_split:
        raise KeyboardConfigError(path, "'matrix' and 'split' cannot both be specified")
    if has_split:
        return f"{chip}_split"
    if has_matrix:
        return chip
    raise KeyboardConfigError(path, "Either 'matrix' or 'split' section must be specified")


def load_project_info(
    path: Path, output_dir: Path, boards: dict[str, str] | None = None
) -> ProjectInfo:
    """Build the ProjectInfo for the keyboard described in ``path``."""
    config = read_keyboard_toml(path)
    chip = resolve_chip(config, boards or {}, path)
    variant = resolve_variant(config, chip, path)

    name = config.keyboard.name.replace(" ", "_")
    try:
        return ProjectInfo(
            project_name=name,
            target_dir=output_dir / name,
            remote_folder=variant,
            output_dir=output_dir,
        )
    except ValidationError as e:
        raise KeyboardConfigError(path, f"invalid project settings: {e}") from e
