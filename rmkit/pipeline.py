"""Scaffold pipeline - fetch, extract, overlay and rewrite a template."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rmkit.models.project import ArchiveSource, ProjectInfo
from rmkit.models.settings import RmkitSettings
from rmkit.template.extractor import VariantExtractor
from rmkit.template.fetcher import ArchiveFetcher, ProgressCallback
from rmkit.template.overlay import overlay
from rmkit.template.placeholders import rewrite_placeholders

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    """Stage the pipeline is in."""

    IDLE = "idle"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    OVERLAYING = "overlaying"
    REWRITING = "rewriting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ScaffoldResult:
    """Outcome of a successful run."""

    target_dir: Path
    extracted: int
    rewritten: list[Path] = field(default_factory=list)


class ScaffoldPipeline:
    """Creates a project directory from the remote firmware template.

    Each step starts only after the previous one succeeded. Errors propagate
    unchanged; the pipeline records the stage it failed in. The downloaded
    archive is always removed, but files that were already extracted stay
    on disk so a failed run can be inspected.
    """

    def __init__(
        self,
        settings: RmkitSettings | None = None,
        source: ArchiveSource | None = None,
        fetcher: ArchiveFetcher | None = None,
        extractor: VariantExtractor | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        self.settings = settings or RmkitSettings()
        self.source = source or ArchiveSource.from_repository(self.settings.template)
        self.fetcher = fetcher or ArchiveFetcher(
            chunk_size=self.settings.chunk_size, timeout=self.settings.timeout
        )
        self.extractor = extractor or VariantExtractor()
        self.progress = progress

        self.state = PipelineState.IDLE
        self.failed_stage: PipelineState | None = None
        self.error: BaseException | None = None

    def _enter(self, state: PipelineState) -> None:
        logger.debug(f"Pipeline {self.state.value} -> {state.value}")
        self.state = state

    async def run(
        self, project: ProjectInfo, keyboard_toml: Path, vial_json: Path
    ) -> ScaffoldResult:
        """Run every step for ``project``.

        Args:
            project: Validated project name, target directory and variant
            keyboard_toml: File copied to ``<target>/keyboard.toml``
            vial_json: File copied to ``<target>/vial.json``
        """
        if self.state != PipelineState.IDLE:
            raise RuntimeError(f"Pipeline already ran (state: {self.state.value})")

        target_dir = project.target_dir
        try:
            self._enter(PipelineState.FETCHING)
            async with self.fetcher.fetch(
                self.source,
                target_dir,
                project.remote_folder,
                self.progress,
                root=project.output_dir,
            ) as archive:
                self._enter(PipelineState.EXTRACTING)
                extracted = self.extractor.extract(archive, project.extraction_request())

            self._enter(PipelineState.OVERLAYING)
            overlay(target_dir, keyboard_toml, vial_json)

            self._enter(PipelineState.REWRITING)
            rewritten = rewrite_placeholders(
                target_dir,
                project.project_name,
                extensions=self.settings.placeholder_extensions,
                token=self.settings.placeholder_token,
            )
        except BaseException as e:
            self.failed_stage = self.state
            self.error = e
            self._enter(PipelineState.FAILED)
            logger.error(f"Scaffolding failed while {self.failed_stage.value}: {e!r}")
            raise
        finally:
            await self.fetcher.close()

        self._enter(PipelineState.DONE)
        logger.info(f"Project created, path: {target_dir}")
        return ScaffoldResult(target_dir=target_dir, extracted=extracted, rewritten=rewritten)
