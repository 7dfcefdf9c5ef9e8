"""Replace placeholder tokens in extracted template files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from rmkit.errors import PlaceholderRewriteFailed
from rmkit.models.settings import PLACEHOLDER_TOKEN

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".toml", ".json")


def iter_template_files(root: Path, extensions: Iterable[str]) -> Iterator[Path]:
    """Yield regular files under ``root`` whose suffix is in ``extensions``."""
    suffixes = {ext.lower() for ext in extensions}
    for path in root.rglob("*"):
        if path.suffix.lower() in suffixes and path.is_file():
            yield path


def rewrite_file(path: Path, token: str, value: str) -> bool:
    """Replace every ``token`` in ``path`` with ``value``.

    The file is only written when its content changes. Returns True if it was.
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            content = f.read()
        updated = content.replace(token, value)
        if updated == content:
            return False
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(updated)
    except (OSError, UnicodeDecodeError) as e:
        raise PlaceholderRewriteFailed(path, e) from e
    return True


def rewrite_placeholders(
    target_dir: Path,
    project_name: str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    token: str = PLACEHOLDER_TOKEN,
) -> list[Path]:
    """Fill in the project name across the template. Returns rewritten files."""
    rewritten: list[Path] = []
    for path in iter_template_files(target_dir, extensions):
        if rewrite_file(path, token, project_name):
            rewritten.append(path)

    logger.info(f"Replaced placeholders in {len(rewritten)} files")
    return rewritten
