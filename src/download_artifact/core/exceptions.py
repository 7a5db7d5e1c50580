"""
download_artifact.core.exceptions - Custom Exception Hierarchy
================================================================

Structured exceptions raised by the pipeline stages. Every stage fails fast
with one of these; the ArtifactDownloader facade catches them at the top
level and turns them into a single failure report.

Exception Hierarchy:
    DownloaderError (base)
        ├── ConfigurationError  - Missing token, malformed owner/repo, bad settings
        ├── TransportError      - Listing, URL resolution or download failed
        ├── ArchiveError        - Downloaded bytes are not a readable zip
        └── FilesystemError     - Directory creation or file write failed

Design Principles:
    1. Every exception carries structured context (not just a string message)
    2. Error codes identify the failure class in logs and results
    3. All exceptions serialize cleanly to a dict (for structlog)

Usage:
    >>> raise TransportError(
    ...     message="Failed to get 'https://example.org/a.zip' (404)",
    ...     status_code=404,
    ...     url="https://example.org/a.zip",
    ... )
"""

from __future__ import annotations

from typing import Any, Optional


# =============================================================================
# Base Exception
# =============================================================================
class DownloaderError(Exception):
    """Base exception for all downloader errors.

    Attributes:
        message: Human-readable error description. This is what ends up in
            the pipeline's failure message.
        error_code: Machine-readable error code (UPPER_SNAKE_CASE).
        details: Arbitrary dict with additional debugging context.

    Example:
        >>> try:
        ...     await downloader.run()
        ... except DownloaderError as e:
        ...     print(f"[{e.error_code}] {e.message}")
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize this exception to a dictionary.

        Returns:
            Dictionary with error_type, message, error_code, and details.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


# =============================================================================
# Configuration Error
# =============================================================================
# Raised before any network access when the inputs are unusable.
# =============================================================================
class ConfigurationError(DownloaderError):
    """Raised when the downloader configuration is invalid or incomplete.

    Common Causes:
        - Missing authentication token
        - Repository not in "owner/repo" form, or an empty part
        - A settings value failing validation (e.g. per_page > 100)

    Example:
        >>> raise ConfigurationError(
        ...     message='Invalid repo format: "octocat". Expected "owner/repo".',
        ...     error_code="INVALID_REPOSITORY",
        ...     details={"repo": "octocat"},
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIG_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# Transport Error
# =============================================================================
class TransportError(DownloaderError):
    """Raised when a call to the artifact service fails.

    Covers the listing endpoint, the download-URL resolution endpoint and
    the archive download itself. Authorization failures (401/403) arrive
    here as well, with their status code.

    Attributes:
        status_code: HTTP status code, or None for connection-level failures.
        url: The URL that was being requested, when known.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        error_code: str = "TRANSPORT_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        if status_code is not None:
            enriched_details["status_code"] = status_code
        if url is not None:
            enriched_details["url"] = url

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.status_code = status_code
        self.url = url


# =============================================================================
# Archive Error
# =============================================================================
class ArchiveError(DownloaderError):
    """Raised when a downloaded archive cannot be read as a zip file."""

    def __init__(
        self,
        message: str,
        error_code: str = "ARCHIVE_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# Filesystem Error
# =============================================================================
class FilesystemError(DownloaderError):
    """Raised when the destination directory or an extracted file can't be written.

    Attributes:
        path: The filesystem path involved, when known.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: str = "FILESYSTEM_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        if path is not None:
            enriched_details["path"] = path

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.path = path
