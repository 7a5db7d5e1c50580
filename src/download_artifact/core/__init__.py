"""
download_artifact.core - Foundation Layer
===========================================

Plain data structures and configuration shared by every other package:

    - config:      DownloaderConfig, RepositoryIdentity, load_config
    - enums:       ArchiveFormat, EntryAction, RunStatus
    - exceptions:  DownloaderError hierarchy
    - models:      Artifact, ArchiveEntry, DownloadResult
    - logging_config: structlog configuration

Dependency Rule:
    core/ depends on nothing else in the download_artifact package.
"""

from download_artifact.core.config import DownloaderConfig, RepositoryIdentity, load_config
from download_artifact.core.enums import ArchiveFormat, EntryAction, RunStatus
from download_artifact.core.exceptions import (
    ArchiveError,
    ConfigurationError,
    DownloaderError,
    FilesystemError,
    TransportError,
)
from download_artifact.core.models import (
    ArchiveEntry,
    Artifact,
    DownloadResult,
    format_bytes,
    parse_timestamp,
)

__all__ = [
    # Config
    "DownloaderConfig",
    "RepositoryIdentity",
    "load_config",
    # Enums
    "ArchiveFormat",
    "EntryAction",
    "RunStatus",
    # Models
    "Artifact",
    "ArchiveEntry",
    "DownloadResult",
    "format_bytes",
    "parse_timestamp",
    # Exceptions
    "DownloaderError",
    "ConfigurationError",
    "TransportError",
    "ArchiveError",
    "FilesystemError",
]
