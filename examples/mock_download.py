"""
Offline Example - Download From an In-Memory Artifact Service
===============================================================

This example runs the complete pipeline without network access: a
MockArtifactService holds three artifacts (two runs of "build-x" and one
of "coverage") and the downloader picks the latest artifact of each name.

This is useful for:
    - Seeing the selection rules in action
    - Trying destination layouts (name filter vs. per-name directories)

Usage:
    python examples/mock_download.py [destination]
"""

from __future__ import annotations

import asyncio
import io
import sys
import tempfile
import zipfile

from download_artifact.core.config import DownloaderConfig
from download_artifact.core.logging_config import configure_logging
from download_artifact.facade import ArtifactDownloader
from download_artifact.integrations.github.mock import MockArtifactService


def build_zip(files: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


async def main(destination: str) -> None:
    """Download the latest artifact of every name into destination."""
    configure_logging("INFO")
    config = DownloaderConfig(service="mock", repo="octocat/hello-world", path=destination)

    service = MockArtifactService(config)
    service.add_artifact(
        {"id": 101, "name": "build-x", "size_in_bytes": 2048, "updated_at": "2024-01-01T09:00:00Z"},
        archive=build_zip({"app/VERSION": "1.0.0"}),
    )
    service.add_artifact(
        {"id": 102, "name": "build-x", "size_in_bytes": 2100, "updated_at": "2024-01-02T09:00:00Z"},
        archive=build_zip({"app/VERSION": "1.0.1"}),
    )
    service.add_artifact(
        {"id": 103, "name": "coverage", "size_in_bytes": 51200, "updated_at": "2024-01-01T10:00:00Z"},
        archive=build_zip({"index.html": "<h1>92%</h1>"}),
    )

    async with ArtifactDownloader(config, service=service) as downloader:
        result = await downloader.run()

    print("Mock Download")
    print("-" * 40)
    print(f"Status    : {result.status.value}")
    print(f"Found     : {result.found_artifact}")
    print(f"Path      : {result.path}")
    for artifact in result.artifacts:
        print(f"Artifact  : {artifact.name} (#{artifact.id}, {artifact.display_size})")
    print()
    print("Extracted Entries:")
    for entry in result.entries:
        print(f"  {entry.action.value:>9}: {entry.destination}")


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else tempfile.mkdtemp(prefix="artifacts-")
    asyncio.run(main(target))
