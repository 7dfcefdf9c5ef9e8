"""Copy the user's configuration files over the template defaults."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from rmkit.errors import ConfigCopyFailed

logger = logging.getLogger(__name__)

KEYBOARD_TOML = "keyboard.toml"
VIAL_JSON = "vial.json"


def copy_config(source: Path, target_dir: Path, name: str) -> Path:
    """Copy ``source`` to ``target_dir/name``, replacing any existing file."""
    destination = target_dir / name
    try:
        shutil.copyfile(source, destination)
    except OSError as e:
        raise ConfigCopyFailed(name, e) from e
    logger.debug(f"Copied {source} to {destination}")
    return destination


def overlay(target_dir: Path, keyboard_toml: Path, vial_json: Path) -> list[Path]:
    """Put ``keyboard.toml`` and ``vial.json`` into the project directory."""
    return [
        copy_config(keyboard_toml, target_dir, KEYBOARD_TOML),
        copy_config(vial_json, target_dir, VIAL_JSON),
    ]
