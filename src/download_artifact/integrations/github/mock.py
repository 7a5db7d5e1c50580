"""
download_artifact.integrations.github.mock - In-Memory Artifact Service
=========================================================================

An ArtifactService that serves artifacts and archives from memory. It is
selected with ``service: mock`` and backs the orchestration tests.

Features:
    - **Artifact registry**: add artifacts (and their archive bytes) up front.
    - **Paging**: listing pages honour config.per_page.
    - **Call tracking**: every call is recorded for test assertions.
    - **Error injection**: make any operation raise a chosen error.

Usage:
    >>> service = MockArtifactService()
    >>> service.add_artifact({"id": 1, "name": "a"}, archive=zip_bytes)
    >>> service.fail_on("fetch_archive", TransportError("boom", status_code=500))
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any, Optional, Union

from download_artifact.core.config import DownloaderConfig, RepositoryIdentity
from download_artifact.core.enums import ArchiveFormat
from download_artifact.core.exceptions import DownloaderError, TransportError
from download_artifact.core.models import Artifact
from download_artifact.integrations.github.base import ArtifactService


class MockArtifactService(ArtifactService):
    """In-memory artifact service for testing and dry runs.

    Attributes:
        _artifacts: Listed artifacts, in listing order.
        _archives: Archive bytes keyed by str(artifact id).
        _locations: Download URLs handed out so far, mapped to their bytes.
        _call_history: One record per service call.
        _failures: Errors to raise, keyed by operation name.
    """

    def __init__(
        self,
        config: Optional[DownloaderConfig] = None,
        *,
        artifacts: Optional[list[Union[Artifact, dict[str, Any]]]] = None,
        archives: Optional[dict[Union[int, str], bytes]] = None,
    ) -> None:
        if config is None:
            config = DownloaderConfig(service="mock")
        super().__init__(config)

        self._artifacts: list[Artifact] = []
        self._archives: dict[str, bytes] = {
            str(artifact_id): content for artifact_id, content in (archives or {}).items()
        }
        self._locations: dict[str, bytes] = {}
        self._call_history: list[dict[str, Any]] = []
        self._failures: dict[str, DownloaderError] = {}
        self._closed = False

        for artifact in artifacts or []:
            self.add_artifact(artifact)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def call_history(self) -> list[dict[str, Any]]:
        return self._call_history

    @property
    def call_count(self) -> int:
        return len(self._call_history)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def calls_to(self, operation: str) -> list[dict[str, Any]]:
        """Recorded calls of a single operation."""
        return [call for call in self._call_history if call["operation"] == operation]

    # =========================================================================
    # Setup
    # =========================================================================

    def add_artifact(
        self,
        artifact: Union[Artifact, dict[str, Any]],
        archive: Optional[bytes] = None,
    ) -> Artifact:
        """Register an artifact, optionally with its archive content.

        Dicts go through the same validation as real listing payloads.
        """
        if not isinstance(artifact, Artifact):
            artifact = Artifact.model_validate(artifact)
        self._artifacts.append(artifact)
        if archive is not None:
            self._archives[str(artifact.id)] = archive
        return artifact

    def fail_on(self, operation: str, error: DownloaderError) -> None:
        """Make an operation raise error on every subsequent call.

        Args:
            operation: "iter_artifact_pages", "resolve_download_url"
                or "fetch_archive".
            error: The exception to raise.
        """
        self._failures[operation] = error

    # =========================================================================
    # ArtifactService
    # =========================================================================

    async def iter_artifact_pages(self, identity: RepositoryIdentity) -> AsyncIterator[list[Artifact]]:
        self._record("iter_artifact_pages", repository=identity.full_name)
        self._raise_if_failing("iter_artifact_pages")

        page_size = self._config.per_page
        for start in range(0, len(self._artifacts), page_size):
            yield list(self._artifacts[start:start + page_size])

    async def resolve_download_url(
        self,
        identity: RepositoryIdentity,
        artifact_id: Union[int, str],
        archive_format: ArchiveFormat = ArchiveFormat.ZIP,
    ) -> str:
        self._record(
            "resolve_download_url",
            repository=identity.full_name,
            artifact_id=artifact_id,
            archive_format=archive_format.value,
        )
        self._raise_if_failing("resolve_download_url")

        key = str(artifact_id)
        if key not in self._archives:
            raise TransportError(
                message=f"Artifact {artifact_id} not found",
                status_code=404,
            )

        location = f"mock://{identity.full_name}/artifacts/{key}.{archive_format.value}"
        self._locations[location] = self._archives[key]
        return location

    async def fetch_archive(self, url: str) -> bytes:
        self._record("fetch_archive", url=url)
        self._raise_if_failing("fetch_archive")

        if url not in self._locations:
            raise TransportError(
                message=f"Failed to get '{url}' (404)",
                status_code=404,
                url=url,
            )
        return self._locations[url]

    async def close(self) -> None:
        self._closed = True

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _record(self, operation: str, **kwargs: Any) -> None:
        self._call_history.append({"operation": operation, **kwargs})

    def _raise_if_failing(self, operation: str) -> None:
        error = self._failures.get(operation)
        if error is not None:
            raise error
