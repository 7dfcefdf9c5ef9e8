"""rmkit - Scaffold RMK keyboard firmware projects from a remote template."""

from rmkit.models.project import ArchiveSource, ExtractionRequest, ProjectInfo
from rmkit.pipeline import PipelineState, ScaffoldPipeline, ScaffoldResult

__version__ = "0.1.0"
__all__ = [
    "ArchiveSource",
    "ExtractionRequest",
    "PipelineState",
    "ProjectInfo",
    "ScaffoldPipeline",
    "ScaffoldResult",
]
