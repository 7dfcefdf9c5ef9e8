"""Extract a single variant folder out of the template archive.

GitHub branch archives wrap the whole repository in one synthetic root
folder (``<repo>-<branch>/``). Each variant of the template is a folder
directly below that root, so an entry belongs to variant ``nrf52840`` when
its second path segment is exactly ``nrf52840``. Selected entries are
written with their first two segments stripped::

    rmk-template-main/nrf52840/src/main.rs  ->  <destination>/src/main.rs

Zip files expose no directory lookup, only a flat index, so the whole index
is scanned once in archive order.
"""

from __future__ import annotations

import logging
import shutil
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from rmkit.errors import (
    DirectoryCreationFailed,
    ExtractionFailed,
    InvalidArchive,
    UnsafeArchivePath,
    VariantNotFound,
)
from rmkit.models.project import ExtractionRequest
from rmkit.template.fetcher import TempArchive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveEntry:
    """Read-only view of one record in the archive index."""

    segments: tuple[str, ...]
    is_directory: bool
    info: zipfile.ZipInfo

    @property
    def name(self) -> str:
        return self.info.filename

    def in_variant(self, selector: str) -> bool:
        """Check if the entry lives under ``<root>/<selector>/``."""
        return len(self.segments) >= 2 and self.segments[1] == selector

    @property
    def relative_parts(self) -> tuple[str, ...]:
        """Path segments with the root and variant folders stripped."""
        return self.segments[2:]


def split_entry_name(name: str) -> tuple[str, ...]:
    """Split an archive entry name into its path segments."""
    return tuple(part for part in name.replace("\\", "/").split("/") if part)


def iter_entries(zf: zipfile.ZipFile) -> Iterator[ArchiveEntry]:
    """Yield archive entries in index order."""
    for info in zf.infolist():
        yield ArchiveEntry(
            segments=split_entry_name(info.filename),
            is_directory=info.is_dir(),
            info=info,
        )


def resolve_output_path(destination: Path, entry: ArchiveEntry) -> Path:
    """Get where ``entry`` is written, rejecting paths outside ``destination``."""
    root = destination.resolve()
    out_path = root.joinpath(*entry.relative_parts).resolve()
    if not out_path.is_relative_to(root):
        raise UnsafeArchivePath(entry.name)
    return out_path


class VariantExtractor:
    """Materializes one variant folder of a template archive."""

    def extract(self, archive: TempArchive, request: ExtractionRequest) -> int:
        """Extract the selected variant and return how many entries matched.

        Raises:
            InvalidArchive: the file is not a zip archive
            VariantNotFound: no entry lives under the requested variant
            UnsafeArchivePath: an entry would land outside the destination
        """
        selector = request.variant_selector
        destination = request.destination_dir

        try:
            zf = zipfile.ZipFile(archive.path, "r")
        except (zipfile.BadZipFile, OSError) as e:
            raise InvalidArchive(archive.path, e) from e

        matched = 0
        with zf:
            for entry in iter_entries(zf):
                if not entry.in_variant(selector):
                    continue
                matched += 1
                out_path = resolve_output_path(destination, entry)

                if entry.is_directory:
                    _make_dirs(out_path)
                    continue

                # Directory entries are optional in zip files
                _make_dirs(out_path.parent)
                try:
                    with zf.open(entry.info) as src, open(out_path, "wb") as dst:
                        shutil.copyfileobj(src, dst)
                except (zipfile.BadZipFile, OSError) as e:
                    raise ExtractionFailed(out_path, e) from e

        if matched == 0:
            raise VariantNotFound(selector)

        logger.info(f"Extracted {matched} entries for {selector} into {destination}")
        return matched


def _make_dirs(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationFailed(path, e) from e
