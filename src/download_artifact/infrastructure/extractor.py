"""
download_artifact.infrastructure.extractor - Archive Extraction
=================================================================

Turns a downloaded zip archive (held in memory) into files on disk.

Architecture Context:
    ┌────────────────┐  bytes   ┌───────────────────┐  files  ┌──────────────┐
    │ ArtifactService │ ───────→ │ ArchiveExtractor  │ ──────→ │ destination/ │
    │ (fetch_archive) │          │  (extract)        │         │              │
    └────────────────┘          └───────────────────┘         └──────────────┘

Destination Rules:
    - A name filter means a single logical target, so its archive is
      extracted straight into the configured path.
    - Otherwise every artifact gets its own sub-directory named after it
      ("artifact" when the name is missing).

Every entry is logged ("creating" for directories, "inflating" for files)
before anything is written, then all entries are extracted in one pass,
overwriting existing files.

Usage:
    >>> extractor = ArchiveExtractor()
    >>> dest = resolve_destination("out", artifact, name_filter="")
    >>> entries = extractor.extract(content, dest)
"""

from __future__ import annotations

import io
import os
import zipfile
import zlib
from pathlib import Path
from typing import Union

import structlog

from download_artifact.core.enums import EntryAction
from download_artifact.core.exceptions import ArchiveError, FilesystemError
from download_artifact.core.models import ArchiveEntry, Artifact


# =============================================================================
# Logger
# =============================================================================
logger = structlog.get_logger()

FALLBACK_DIRECTORY_NAME = "artifact"


def resolve_destination(
    base_path: Union[str, Path],
    artifact: Artifact,
    name_filter: str = "",
) -> Path:
    """Compute where an artifact's archive is extracted.

    Args:
        base_path: The configured destination path.
        artifact: The artifact being extracted.
        name_filter: The configured name filter ("" when unset).

    Returns:
        base_path itself when a name filter is set, otherwise
        base_path/<artifact name>.

    Example:
        >>> resolve_destination("out", build_x, name_filter="")
        PosixPath('out/build-x')
        >>> resolve_destination("out", build_x, name_filter="build-x")
        PosixPath('out')
    """
    if name_filter:
        return Path(base_path)
    return Path(base_path) / (artifact.name or FALLBACK_DIRECTORY_NAME)


def entry_destination(destination: Union[str, Path], entry_name: str) -> str:
    """Where zipfile writes an entry when extracting into destination.

    Absolute prefixes, drive letters, empty segments and "." / ".." segments
    are dropped the same way ZipFile.extractall sanitizes member names, so
    the result always lies inside destination.

    Example:
        >>> entry_destination("out", "/abs/../f.txt")
        'out/abs/f.txt'
    """
    name = entry_name.replace("/", os.path.sep)
    if os.path.altsep:
        name = name.replace(os.path.altsep, os.path.sep)
    name = os.path.splitdrive(name)[1]
    parts = [part for part in name.split(os.path.sep) if part not in ("", os.path.curdir, os.path.pardir)]
    return os.path.join(str(destination), *parts)


class ArchiveExtractor:
    """Extracts in-memory zip archives into destination directories.

    Stateless apart from its bound logger; one instance serves the whole
    run.
    """

    def __init__(self) -> None:
        self._logger = logger.bind(component="archive_extractor")

    def ensure_directory(self, destination: Path) -> None:
        """Create the destination directory (and parents) if absent.

        Raises:
            FilesystemError: If the directory can't be created.
        """
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                message=f"Unable to create directory '{destination}': {e}",
                path=str(destination),
            ) from e

    def list_entries(self, archive: zipfile.ZipFile, destination: Path) -> list[ArchiveEntry]:
        """Describe every entry of an open archive relative to destination."""
        entries = []
        for info in archive.infolist():
            is_dir = info.is_dir()
            entries.append(
                ArchiveEntry(
                    name=info.filename,
                    is_dir=is_dir,
                    action=EntryAction.for_entry(is_dir),
                    destination=entry_destination(destination, info.filename),
                )
            )
        return entries

    def extract(self, content: bytes, destination: Path) -> list[ArchiveEntry]:
        """Extract a zip archive into destination, overwriting existing files.

        Args:
            content: The complete archive bytes.
            destination: Target directory; created if absent.

        Returns:
            The extracted entries, in archive order.

        Raises:
            ArchiveError: If content is not a readable zip archive.
            FilesystemError: If the directory or a file can't be written.
        """
        self.ensure_directory(destination)

        try:
            with zipfile.ZipFile(io.BytesIO(content)) as archive:
                entries = self.list_entries(archive, destination)
                for entry in entries:
                    self._logger.info(
                        "archive_entry",
                        action=entry.action.value,
                        path=entry.destination,
                    )
                archive.extractall(destination)
        except (zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise ArchiveError(
                message=f"Invalid zip archive for '{destination}': {e}",
                details={"destination": str(destination), "size": len(content)},
            ) from e
        except OSError as e:
            raise FilesystemError(
                message=f"Unable to extract into '{destination}': {e}",
                path=str(destination),
            ) from e

        self._logger.debug(
            "archive_extracted",
            destination=str(destination),
            entry_count=len(entries),
        )
        return entries
