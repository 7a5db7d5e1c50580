"""
download_artifact.integrations - External Service Integration Layer
=====================================================================

Adapters for the systems the downloader talks to, each behind an
interface so tests can swap in in-memory versions.

Sub-packages:
    github/   - Artifact listing, download-URL resolution, archive fetch
    actions/  - Step outputs and failure reporting for the CI runner
"""

__all__: list[str] = []
