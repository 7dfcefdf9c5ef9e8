"""Template acquisition and materialization steps."""

from rmkit.template.extractor import ArchiveEntry, VariantExtractor, iter_entries
from rmkit.template.fetcher import ArchiveFetcher, TempArchive
from rmkit.template.overlay import overlay
from rmkit.template.placeholders import iter_template_files, rewrite_placeholders

__all__ = [
    "ArchiveEntry",
    "ArchiveFetcher",
    "TempArchive",
    "VariantExtractor",
    "iter_entries",
    "iter_template_files",
    "overlay",
    "rewrite_placeholders",
]
