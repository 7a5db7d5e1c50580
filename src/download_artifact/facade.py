"""
download_artifact.facade - ArtifactDownloader Top-Level Facade
================================================================

The single entry point tying the pipeline stages together:

    ┌──────────────────────────────────────────────────────────────┐
    │                 ArtifactDownloader (Facade)                   │
    │                                                               │
    │  1. Lister     ArtifactService.list_artifacts()   (all pages) │
    │  2. Filter     filter_artifacts()                             │
    │  3. Selector   select_artifacts()                             │
    │  4. Fetcher    resolve_download_url() → fetch_archive()       │
    │     Extractor  resolve_destination() → ArchiveExtractor       │
    └──────────────────────────────┬───────────────────────────────┘
                                   │
                                   ▼
                            DownloadResult

Stages run strictly one after another, and artifacts are processed one at
a time. Every stage fails fast; run() catches the failure, logs it once and
returns a FAILED result instead of raising, so the caller reports exactly
one failure message.

Usage:
    >>> config = DownloaderConfig(github_token="...", repo="octocat/hello-world")
    >>> result = await ArtifactDownloader(config).run()
    >>> result.outputs()
    {'found-artifact': True, 'path': '/home/runner/work/hello-world'}

    Or with an injected service:
    >>> async with ArtifactDownloader(config, service=MockArtifactService()) as downloader:
    ...     result = await downloader.run()
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Any, Optional

import structlog

from download_artifact.core.config import DownloaderConfig, RepositoryIdentity
from download_artifact.core.enums import ArchiveFormat, RunStatus
from download_artifact.core.exceptions import DownloaderError
from download_artifact.core.models import ArchiveEntry, Artifact, DownloadResult
from download_artifact.infrastructure.extractor import (
    FALLBACK_DIRECTORY_NAME,
    ArchiveExtractor,
    resolve_destination,
)
from download_artifact.integrations.github.base import ArtifactService
from download_artifact.integrations.github.factory import create_artifact_service
from download_artifact.selection.filters import filter_artifacts
from download_artifact.selection.selector import select_artifacts


# =============================================================================
# Logger
# =============================================================================
logger = structlog.get_logger()


class ArtifactDownloader:
    """Runs the list → filter → select → download → extract pipeline.

    Attributes:
        _config: Immutable configuration for this invocation.
        _service: Injected artifact service, or None to build one per run
            from the configuration.
        _extractor: Archive extractor.

    Example:
        >>> downloader = ArtifactDownloader(config)
        >>> result = await downloader.run()
        >>> if not result.succeeded:
        ...     print(result.error_message)
    """

    def __init__(
        self,
        config: Optional[DownloaderConfig] = None,
        *,
        service: Optional[ArtifactService] = None,
        extractor: Optional[ArchiveExtractor] = None,
    ) -> None:
        self._config = config or DownloaderConfig()
        self._service = service
        self._extractor = extractor or ArchiveExtractor()
        self._logger = logger.bind(component="artifact_downloader")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> DownloaderConfig:
        return self._config

    @property
    def service(self) -> Optional[ArtifactService]:
        return self._service

    # =========================================================================
    # Async Context Manager
    # =========================================================================

    async def __aenter__(self) -> ArtifactDownloader:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the injected service, if any."""
        if self._service is not None:
            await self._service.close()

    # =========================================================================
    # Pipeline
    # =========================================================================

    async def run(self) -> DownloadResult:
        """Execute one complete download run.

        Returns:
            A SUCCEEDED result (with or without artifacts), or a FAILED
            result carrying the single failure message. Never raises for
            pipeline errors.
        """
        started_at = datetime.now(timezone.utc)
        try:
            return await self._run(started_at)
        except Exception as e:
            if isinstance(e, DownloaderError):
                message, error_code = e.message, e.error_code
            else:
                message, error_code = str(e) or type(e).__name__, "UNEXPECTED_ERROR"

            self._logger.error(
                "download_failed",
                error=message,
                error_code=error_code,
                error_type=type(e).__name__,
            )
            return DownloadResult(
                status=RunStatus.FAILED,
                error_message=f"Download failed: {message}",
                error_code=error_code,
                started_at=started_at,
                completed_at=datetime.now(timezone.utc),
            )

    async def _run(self, started_at: datetime) -> DownloadResult:
        # Configuration problems must surface before any network access.
        identity = self._config.repository
        self._logger.info(
            "download_starting",
            repository=identity.full_name,
            path=self._config.path,
            name=self._config.name,
            latest=self._config.latest,
        )

        if self._service is not None:
            return await self._run_with(self._service, identity, started_at)

        async with create_artifact_service(self._config) as service:
            return await self._run_with(service, identity, started_at)

    async def _run_with(
        self,
        service: ArtifactService,
        identity: RepositoryIdentity,
        started_at: datetime,
    ) -> DownloadResult:
        selected = await self.select(service, identity)

        if not selected:
            self._logger.info("no_artifacts_found", repository=identity.full_name)
            return DownloadResult(
                status=RunStatus.SUCCEEDED,
                found_artifact=False,
                path="",
                started_at=started_at,
                completed_at=datetime.now(timezone.utc),
            )

        self._logger.info("artifacts_found", artifact_count=len(selected))
        entries: list[ArchiveEntry] = []
        for artifact in selected:
            entries.extend(await self.download(service, identity, artifact))

        return DownloadResult(
            status=RunStatus.SUCCEEDED,
            found_artifact=True,
            path=os.path.abspath(self._config.path),
            artifacts=selected,
            entries=entries,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
        )

    async def select(self, service: ArtifactService, identity: RepositoryIdentity) -> list[Artifact]:
        """List, filter and select the artifacts to download."""
        listing = await service.list_artifacts(identity)
        candidates = filter_artifacts(listing, self._config.name)
        selected = select_artifacts(candidates, latest=self._config.latest)

        self._logger.info(
            "artifacts_selected",
            listed=len(listing),
            candidates=len(candidates),
            selected=[
                {"id": a.id, "name": a.name, "updated_at": a.updated_at.isoformat() if a.updated_at else None}
                for a in selected
            ],
        )
        return selected

    async def download(
        self,
        service: ArtifactService,
        identity: RepositoryIdentity,
        artifact: Artifact,
    ) -> list[ArchiveEntry]:
        """Download one artifact and extract it into its destination."""
        self._logger.info(
            "artifact_downloading",
            artifact_id=artifact.id,
            archive=f"{artifact.name or FALLBACK_DIRECTORY_NAME}.zip",
            size=artifact.display_size,
        )

        url = await service.resolve_download_url(identity, artifact.id, ArchiveFormat.ZIP)
        content = await service.fetch_archive(url)

        destination = resolve_destination(self._config.path, artifact, self._config.name)
        return self._extractor.extract(content, destination)

    def __repr__(self) -> str:
        return f"ArtifactDownloader(repo={self._config.repo!r}, service={self._config.service!r})"


async def run_download(
    config: DownloaderConfig,
    service: Optional[ArtifactService] = None,
) -> DownloadResult:
    """Convenience wrapper: run one download with a fresh facade."""
    async with ArtifactDownloader(config, service=service) as downloader:
        return await downloader.run()
