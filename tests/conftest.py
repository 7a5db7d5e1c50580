"""
Shared Test Fixtures for download-artifact
=============================================

Reusable pytest fixtures, organized by layer:

    1. Environment isolation (runner variables never leak into tests)
    2. Configuration fixtures
    3. Artifact and archive builders
    4. Service fixtures (MockArtifactService)
"""

from __future__ import annotations

import io
import os
import zipfile
from typing import Any, Optional

import pytest
import structlog

from download_artifact.core.config import DownloaderConfig
from download_artifact.core.models import Artifact
from download_artifact.integrations.github.mock import MockArtifactService


# =============================================================================
# Environment Isolation
# =============================================================================
# Tests may themselves run inside a GitHub Actions job, where GITHUB_OUTPUT,
# GITHUB_API_URL and INPUT_* are set by the runner.
# =============================================================================
@pytest.fixture(autouse=True)
def clean_runner_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.upper().startswith("INPUT_"):
            monkeypatch.delenv(key, raising=False)
    for key in ("GITHUB_OUTPUT", "GITHUB_API_URL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo configure_logging() calls made by a test."""
    yield
    structlog.reset_defaults()


# =============================================================================
# Builders
# =============================================================================
def make_zip(files: dict[str, str], directories: Optional[list[str]] = None) -> bytes:
    """Build an in-memory zip archive.

    Args:
        files: Entry name → text content.
        directories: Directory entry names (with trailing slash).
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for directory in directories or []:
            archive.writestr(zipfile.ZipInfo(directory), "")
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def make_artifact(
    artifact_id: Any,
    name: Optional[str],
    updated_at: Optional[str] = "2024-01-01T00:00:00Z",
    expired: bool = False,
    **extra: Any,
) -> Artifact:
    """Build an Artifact through the same validation as listing payloads."""
    payload: dict[str, Any] = {
        "id": artifact_id,
        "name": name,
        "updated_at": updated_at,
        "expired": expired,
    }
    payload.update(extra)
    return Artifact.model_validate(payload)


# =============================================================================
# Configuration
# =============================================================================
@pytest.fixture
def out_dir(tmp_path):
    """Destination directory (not created up front)."""
    return tmp_path / "out"


@pytest.fixture
def config(out_dir):
    """Mock-service configuration writing into out_dir."""
    return DownloaderConfig(
        service="mock",
        repo="octocat/hello-world",
        path=str(out_dir),
    )


# =============================================================================
# Services
# =============================================================================
@pytest.fixture
def mock_service(config):
    """Fresh MockArtifactService with no artifacts."""
    return MockArtifactService(config)
