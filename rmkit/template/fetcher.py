"""Download the template archive to a temporary file."""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Callable

import httpx

from rmkit.errors import DirectoryCreationFailed, DownloadFailed
from rmkit.models.project import ArchiveSource

logger = logging.getLogger(__name__)

TEMP_ARCHIVE_PREFIX = ".rmkit-"
DEFAULT_CHUNK_SIZE = 64 * 1024

# callback(downloaded_bytes, total_bytes, variant)
ProgressCallback = Callable[[int, int | None, str], None]


@dataclass
class TempArchive:
    """A downloaded archive that lives only as long as its fetch context."""

    path: Path
    size: int = 0

    def release(self) -> None:
        """Delete the archive file if it is still on disk."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to remove temp file '{self.path}': {e}")


def prepare_destination(dest_dir: Path, root: Path | None = None) -> None:
    """Remove ``dest_dir`` if it exists and create it empty.

    ``dest_dir`` must lie strictly below ``root`` when one is given, and may
    never contain the current working directory.
    """
    resolved = dest_dir.resolve()
    if root is not None:
        root = root.resolve()
        if resolved == root or not resolved.is_relative_to(root):
            raise DirectoryCreationFailed(
                dest_dir, ValueError(f"refusing to replace a directory outside {root}")
            )
    if Path.cwd().resolve().is_relative_to(resolved):
        raise DirectoryCreationFailed(
            dest_dir, ValueError("refusing to replace the working directory or its parents")
        )

    try:
        if dest_dir.exists():
            logger.info(f"Removing existing project directory {dest_dir}")
            shutil.rmtree(dest_dir)
        dest_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationFailed(dest_dir, e) from e


class ArchiveFetcher:
    """Streams a remote archive to disk chunk by chunk."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        timeout: float = 30.0,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self.chunk_size = chunk_size
        self.timeout = timeout

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    @asynccontextmanager
    async def fetch(
        self,
        source: ArchiveSource,
        dest_dir: Path,
        variant: str,
        progress: ProgressCallback | None = None,
        root: Path | None = None,
    ) -> AsyncIterator[TempArchive]:
        """Download ``source`` into ``dest_dir`` and yield the temp archive.

        The destination directory is wiped and recreated first, refusing any
        directory that is not below ``root``. The archive gets a unique name so
        it cannot clash with template files. It is deleted when the context
        exits, whether the body completed, raised, or was cancelled.
        """
        prepare_destination(dest_dir, root)
        try:
            with tempfile.NamedTemporaryFile(
                dir=dest_dir, prefix=TEMP_ARCHIVE_PREFIX, suffix=".zip", delete=False
            ) as tmp:
                archive = TempArchive(path=Path(tmp.name))
        except OSError as e:
            raise DownloadFailed(source.url, cause=e) from e

        try:
            await self._download(source.url, archive, variant, progress)
            yield archive
        finally:
            archive.release()

    async def _download(
        self,
        url: str,
        archive: TempArchive,
        variant: str,
        progress: ProgressCallback | None,
    ) -> None:
        logger.info(f"Downloading project template for {variant} from {url}")
        try:
            async with self.client.stream("GET", url, follow_redirects=True) as response:
                if not response.is_success:
                    raise DownloadFailed(url, status=response.status_code)

                total = _content_length(response)
                with open(archive.path, "wb") as f:
                    async for chunk in response.aiter_bytes(self.chunk_size):
                        f.write(chunk)
                        archive.size += len(chunk)
                        _report(progress, archive.size, total, variant)
        except httpx.HTTPError as e:
            raise DownloadFailed(url, cause=e) from e
        except OSError as e:
            raise DownloadFailed(url, cause=e) from e

        logger.debug(f"Downloaded {archive.size} bytes to {archive.path}")


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("Content-Length")
    if value is None or not value.isdigit():
        return None
    return int(value)


def _report(
    progress: ProgressCallback | None, downloaded: int, total: int | None, variant: str
) -> None:
    if progress is None:
        return
    try:
        progress(downloaded, total, variant)
    except Exception as e:
        # Progress display must never abort the download
        logger.warning(f"Progress callback failed: {e}")
