"""
download-artifact - CI Artifact Downloader
============================================

Finds the artifacts of a GitHub Actions repository, keeps the most recent
artifact of each name (or only the single most recent one), downloads the
zip archives and extracts them into a destination directory.

    Lister → Filter → Selector → Fetcher/Extractor → step outputs

Quick Start:
    >>> from download_artifact import ArtifactDownloader, DownloaderConfig
    >>> config = DownloaderConfig(github_token="...", repo="octocat/hello-world")
    >>> result = await ArtifactDownloader(config).run()
"""

__version__ = "0.1.0"

from download_artifact.core.config import DownloaderConfig, load_config
from download_artifact.core.models import DownloadResult
from download_artifact.facade import ArtifactDownloader, run_download

__all__ = [
    "ArtifactDownloader",
    "DownloaderConfig",
    "DownloadResult",
    "load_config",
    "run_download",
    "__version__",
]
