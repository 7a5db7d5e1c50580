"""
Tests for download_artifact.integrations.github.mock and factory
===================================================================

These tests verify the in-memory artifact service and service creation:
    - Paging by config.per_page
    - Download locations and archive lookup
    - Call tracking and error injection
    - create_artifact_service() dispatch
"""

import pytest

from tests.conftest import make_zip

from download_artifact.core.config import DownloaderConfig, RepositoryIdentity
from download_artifact.core.exceptions import ConfigurationError, TransportError
from download_artifact.integrations.github.client import GitHubArtifactService
from download_artifact.integrations.github.factory import create_artifact_service
from download_artifact.integrations.github.mock import MockArtifactService


IDENTITY = RepositoryIdentity(owner="octocat", repo="hello-world")


# =============================================================================
# Test: MockArtifactService
# =============================================================================
class TestMockArtifactService:
    """Tests for MockArtifactService."""

    async def test_empty_listing(self, mock_service) -> None:
        assert await mock_service.list_artifacts(IDENTITY) == []
        assert len(mock_service.calls_to("iter_artifact_pages")) == 1

    async def test_pages_follow_per_page(self) -> None:
        service = MockArtifactService(
            DownloaderConfig(service="mock", per_page=2),
            artifacts=[{"id": i, "name": "a"} for i in range(5)],
        )
        pages = [page async for page in service.iter_artifact_pages(IDENTITY)]
        assert [len(page) for page in pages] == [2, 2, 1]
        assert [a.id for a in await service.list_artifacts(IDENTITY)] == [0, 1, 2, 3, 4]

    async def test_resolve_and_fetch(self, mock_service) -> None:
        archive = make_zip({"f.txt": "x"})
        mock_service.add_artifact({"id": 11, "name": "build-x"}, archive=archive)

        url = await mock_service.resolve_download_url(IDENTITY, 11)

        assert url == "mock://octocat/hello-world/artifacts/11.zip"
        assert await mock_service.fetch_archive(url) == archive
        assert mock_service.calls_to("resolve_download_url")[0]["archive_format"] == "zip"

    async def test_archives_by_constructor(self) -> None:
        service = MockArtifactService(
            artifacts=[{"id": "x", "name": "a"}],
            archives={"x": b"bytes"},
        )
        url = await service.resolve_download_url(IDENTITY, "x")
        assert await service.fetch_archive(url) == b"bytes"

    async def test_resolve_without_archive_is_404(self, mock_service) -> None:
        mock_service.add_artifact({"id": 1, "name": "a"})
        with pytest.raises(TransportError) as exc_info:
            await mock_service.resolve_download_url(IDENTITY, 1)
        assert exc_info.value.status_code == 404

    async def test_fetch_unknown_url(self, mock_service) -> None:
        with pytest.raises(TransportError) as exc_info:
            await mock_service.fetch_archive("mock://nowhere.zip")
        assert exc_info.value.message == "Failed to get 'mock://nowhere.zip' (404)"

    async def test_error_injection(self, mock_service) -> None:
        mock_service.fail_on("iter_artifact_pages", TransportError("rate limited", status_code=403))
        with pytest.raises(TransportError, match="rate limited"):
            await mock_service.list_artifacts(IDENTITY)

    async def test_call_history_and_close(self, mock_service) -> None:
        async with mock_service as service:
            await service.list_artifacts(IDENTITY)
        assert mock_service.call_count == 1
        assert mock_service.call_history[0] == {
            "operation": "iter_artifact_pages",
            "repository": "octocat/hello-world",
        }
        assert mock_service.is_closed

    def test_repr(self, mock_service) -> None:
        assert repr(mock_service) == "MockArtifactService(service='mock')"


# =============================================================================
# Test: Service Factory
# =============================================================================
class TestCreateArtifactService:
    """Tests for create_artifact_service()."""

    def test_mock(self) -> None:
        service = create_artifact_service(DownloaderConfig(service="mock"))
        assert isinstance(service, MockArtifactService)

    async def test_github(self) -> None:
        service = create_artifact_service(DownloaderConfig(github_token="t"))
        assert isinstance(service, GitHubArtifactService)
        await service.close()

    def test_github_without_token(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            create_artifact_service(DownloaderConfig())
        assert exc_info.value.error_code == "MISSING_TOKEN"

    def test_unknown_service(self) -> None:
        config = DownloaderConfig.model_construct(service="gitlab")
        with pytest.raises(ConfigurationError) as exc_info:
            create_artifact_service(config)
        assert exc_info.value.error_code == "UNKNOWN_SERVICE"
