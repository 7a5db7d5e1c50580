"""
download_artifact.integrations.github.base - Abstract Artifact Service
========================================================================

The contract between the downloader and the service that stores CI
artifacts. The facade never talks HTTP directly; it calls these methods:

    ┌────────────────────┐  iter_artifact_pages()   ┌─────────────────────┐
    │ ArtifactDownloader │ ───────────────────────→ │  ArtifactService    │
    │                    │  resolve_download_url()  │  (abstract)         │
    │                    │ ───────────────────────→ │                     │
    │                    │  fetch_archive()         │                     │
    │                    │ ───────────────────────→ │                     │
    └────────────────────┘                          └──────────┬──────────┘
                                                               │
                                                   ┌───────────┴──────────┐
                                                   │                      │
                                              ┌────▼────┐       ┌─────────▼─────────┐
                                              │  Mock   │       │ GitHub REST API   │
                                              │ Service │       │ (httpx)           │
                                              └─────────┘       └───────────────────┘

Failures of any call surface as TransportError; nothing is retried.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any, Union

import structlog

from download_artifact.core.config import DownloaderConfig, RepositoryIdentity
from download_artifact.core.enums import ArchiveFormat
from download_artifact.core.models import Artifact


# =============================================================================
# Logger
# =============================================================================
logger = structlog.get_logger()


class ArtifactService(ABC):
    """Abstract base class for artifact services.

    What subclasses must implement:
        - iter_artifact_pages(): lazily page through the artifact listing
        - resolve_download_url(): short-lived URL of an artifact's archive
        - fetch_archive(): complete archive bytes from that URL

    What the base class provides:
        - list_artifacts(): drains every page into one list
        - async context manager support around close()

    Attributes:
        _config: The downloader configuration.
    """

    def __init__(self, config: DownloaderConfig) -> None:
        self._config = config
        self._logger = logger.bind(component=self.__class__.__name__)

    @property
    def config(self) -> DownloaderConfig:
        return self._config

    # =========================================================================
    # Abstract Methods (Subclasses MUST implement)
    # =========================================================================

    @abstractmethod
    def iter_artifact_pages(self, identity: RepositoryIdentity) -> AsyncIterator[list[Artifact]]:
        """Yield the repository's artifacts one page at a time.

        Each call starts a fresh pagination cursor; the iterator is finite
        and can't be restarted.

        Args:
            identity: Repository whose artifacts are listed.

        Yields:
            Lists of validated Artifact records, in service order.

        Raises:
            TransportError: If a page can't be fetched or parsed.
        """
        ...

    @abstractmethod
    async def resolve_download_url(
        self,
        identity: RepositoryIdentity,
        artifact_id: Union[int, str],
        archive_format: ArchiveFormat = ArchiveFormat.ZIP,
    ) -> str:
        """Resolve the short-lived download location of an artifact archive.

        Raises:
            TransportError: If the service refuses or returns no location.
        """
        ...

    @abstractmethod
    async def fetch_archive(self, url: str) -> bytes:
        """Download the complete archive at url into memory.

        Raises:
            TransportError: If the response status is not a success.
        """
        ...

    # =========================================================================
    # Provided Methods
    # =========================================================================

    async def list_artifacts(self, identity: RepositoryIdentity) -> list[Artifact]:
        """Collect every page of the listing into a single list."""
        artifacts: list[Artifact] = []
        async for page in self.iter_artifact_pages(identity):
            artifacts.extend(page)

        self._logger.info(
            "artifacts_listed",
            repository=identity.full_name,
            artifact_count=len(artifacts),
        )
        return artifacts

    async def close(self) -> None:
        """Release any held resources. Override when there are some."""
        return None

    async def __aenter__(self) -> ArtifactService:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(service={self._config.service!r})"
