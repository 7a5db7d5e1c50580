"""
download_artifact.integrations.github.factory - Artifact Service Factory
==========================================================================

Maps config.service to a concrete ArtifactService:

    "github" → GitHubArtifactService (REST API over httpx)
    "mock"   → MockArtifactService   (in-memory, no network)
"""

from __future__ import annotations

from download_artifact.core.config import DownloaderConfig
from download_artifact.core.exceptions import ConfigurationError
from download_artifact.integrations.github.base import ArtifactService


def create_artifact_service(config: DownloaderConfig) -> ArtifactService:
    """Create the artifact service named by the configuration.

    Args:
        config: Downloader configuration.

    Returns:
        A ready-to-use ArtifactService.

    Raises:
        ConfigurationError: If the service name is unknown, or the GitHub
            service is requested without a token.
    """
    service_name = config.service.lower()

    if service_name == "github":
        from download_artifact.integrations.github.client import GitHubArtifactService
        return GitHubArtifactService(config)

    if service_name == "mock":
        from download_artifact.integrations.github.mock import MockArtifactService
        return MockArtifactService(config)

    raise ConfigurationError(
        message=f"Unknown artifact service: '{config.service}'. Available services: 'github', 'mock'.",
        error_code="UNKNOWN_SERVICE",
        details={"service": config.service},
    )
