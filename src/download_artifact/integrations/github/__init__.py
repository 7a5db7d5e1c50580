"""
download_artifact.integrations.github - Artifact Services
===========================================================

Available Services:
    - ArtifactService:        Abstract contract (listing, URL resolution, fetch)
    - GitHubArtifactService:  GitHub Actions REST API over httpx
    - MockArtifactService:    In-memory service for tests and dry runs

Usage:
    >>> service = create_artifact_service(config)
    >>> async with service:
    ...     artifacts = await service.list_artifacts(config.repository)
"""

from download_artifact.integrations.github.base import ArtifactService
from download_artifact.integrations.github.client import GitHubArtifactService
from download_artifact.integrations.github.factory import create_artifact_service
from download_artifact.integrations.github.mock import MockArtifactService

__all__ = [
    "ArtifactService",
    "GitHubArtifactService",
    "MockArtifactService",
    "create_artifact_service",
]
