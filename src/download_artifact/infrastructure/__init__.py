"""
download_artifact.infrastructure - Filesystem Layer
=====================================================

Components that write to the local filesystem:

    - ArchiveExtractor:     extracts in-memory zip archives
    - resolve_destination:  where an artifact's archive is extracted
    - entry_destination:    where a single archive entry lands on disk
"""

from download_artifact.infrastructure.extractor import (
    ArchiveExtractor,
    entry_destination,
    resolve_destination,
)

__all__ = [
    "ArchiveExtractor",
    "entry_destination",
    "resolve_destination",
]
