"""
download_artifact.core.models - Core Data Models
==================================================

Pydantic models that flow through every stage of the downloader:

    Artifact       → One record from the artifact-listing service
    ArchiveEntry   → One entry of an extracted zip archive
    DownloadResult → What happened during one invocation (success or failure)

Data Flow:
    listing JSON ──validate──→ Artifact ──filter/select──→ Artifact (subset)
                                                            │
                                  download + extract        ↓
                              ArchiveEntry ←──────── ArchiveExtractor
                                    │
                                    ↓
                              DownloadResult ──→ ActionsReporter

Design Principles:
    1. Validated once at ingestion: response shapes from the listing service
       are loose, so every field gets a documented default when absent and
       later stages never re-check them.
    2. Immutable: artifacts are selected by reference and never mutated.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from download_artifact.core.enums import EntryAction, RunStatus


# =============================================================================
# Timestamps
# =============================================================================
# Artifacts without a usable updated_at compare as the smallest possible
# timestamp, so they never outrank an artifact that has one.
# =============================================================================
MIN_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)

_DATETIME_ADAPTER = TypeAdapter(datetime)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the listing service.

    Parsing is delegated to pydantic, so the forms GitHub emits
    ("2024-01-02T03:04:05Z") work as well as fractions of a second, "+0000"
    style offsets and date-only strings. Naive values are taken as UTC.

    Args:
        value: Raw value from the JSON payload.

    Returns:
        A timezone-aware datetime, or None when the value is absent or
        can't be parsed.
    """
    if isinstance(value, str):
        value = value.strip()
    if not value or not isinstance(value, (str, datetime)):
        return None

    try:
        parsed = _DATETIME_ADAPTER.validate_python(value)
    except ValidationError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_bytes(num_bytes: int) -> str:
    """Render a byte count with decimal units, e.g. 1500 -> "1.5 KB".

    Args:
        num_bytes: Non-negative byte count.

    Returns:
        The value rounded to two decimals (trailing zeros dropped) followed
        by the largest unit that keeps it at or above 1.
    """
    if num_bytes <= 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB"]
    value = float(num_bytes)
    index = 0
    while value >= 1000 and index < len(units) - 1:
        value /= 1000
        index += 1

    return f"{round(value, 2):g} {units[index]}"


# =============================================================================
# Artifact Model
# =============================================================================
class Artifact(BaseModel):
    """An archive produced by a CI run, as listed by the artifact service.

    Only the fields the downloader relies on are modelled; anything else in
    the payload (workflow_run, node_id, ...) is ignored.

    Attributes:
        id: Opaque identifier, unique within the repository.
        name: Artifact name. Not unique across entries: every re-run of a
            workflow uploads a new artifact with the same name.
        size_in_bytes: Archive size; absent values become 0.
        updated_at: Last update time; absent or unparsable values become None.
        created_at: Creation time, same parsing rules as updated_at.
        expired: Whether the service has expired the artifact; absent -> False.
        archive_download_url: API URL for the zip archive, when provided.

    Example:
        >>> artifact = Artifact.model_validate({
        ...     "id": 11,
        ...     "name": "build-x",
        ...     "size_in_bytes": 1500,
        ...     "updated_at": "2024-01-02T00:00:00Z",
        ...     "expired": False,
        ... })
        >>> artifact.display_size
        '1.5 KB'
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Union[int, str] = Field(
        description="Opaque artifact identifier",
    )
    name: Optional[str] = Field(
        default=None,
        description="Artifact name (None when the service omits it)",
    )
    size_in_bytes: int = Field(
        default=0,
        ge=0,
        description="Archive size in bytes (0 when absent)",
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        description="Last-updated timestamp, UTC (None when absent or malformed)",
    )
    created_at: Optional[datetime] = Field(
        default=None,
        description="Creation timestamp, UTC (None when absent or malformed)",
    )
    expired: bool = Field(
        default=False,
        description="True once the service no longer serves the archive",
    )
    archive_download_url: Optional[str] = Field(
        default=None,
        description="API URL resolving to the zip archive",
    )

    @field_validator("size_in_bytes", mode="before")
    @classmethod
    def _default_size(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("expired", mode="before")
    @classmethod
    def _default_expired(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("updated_at", "created_at", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)

    @property
    def sort_key(self) -> datetime:
        """Timestamp used by the latest-artifact selection."""
        return self.updated_at or MIN_TIMESTAMP

    @property
    def display_size(self) -> str:
        return format_bytes(self.size_in_bytes)


# =============================================================================
# Archive Entry Model
# =============================================================================
class ArchiveEntry(BaseModel):
    """One entry of an extracted archive.

    Attributes:
        name: Entry name inside the archive ("dist/", "dist/app.whl").
        is_dir: Whether the entry is a directory.
        action: CREATING for directories, INFLATING for files.
        destination: Where the entry lands on disk.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Entry name inside the archive")
    is_dir: bool = Field(description="True for directory entries")
    action: EntryAction = Field(description="creating (directory) or inflating (file)")
    destination: str = Field(description="Resolved path of the entry on disk")


# =============================================================================
# Download Result Model
# =============================================================================
# The top-level orchestration never raises: it returns one of these, and the
# reporter turns it into pipeline outputs or a single failure message.
# =============================================================================
class DownloadResult(BaseModel):
    """Outcome of one downloader invocation.

    Attributes:
        status: SUCCEEDED or FAILED.
        found_artifact: True iff at least one artifact was selected.
        path: Absolute destination path when artifacts were found, else "".
        artifacts: The selection set, in processing order.
        entries: Every archive entry extracted during the run.
        error_message: Failure message ("Download failed: ...") on failure.
        error_code: Error code of the exception that aborted the run.
        started_at: When the run started (UTC).
        completed_at: When the run finished (UTC).

    Example:
        >>> result = await downloader.run()
        >>> result.outputs()
        {'found-artifact': True, 'path': '/home/runner/work/out'}
    """

    status: RunStatus = Field(description="Final run status")
    found_artifact: bool = Field(
        default=False,
        description="True iff at least one artifact was selected",
    )
    path: str = Field(
        default="",
        description="Absolute destination path (empty when nothing was found)",
    )
    artifacts: list[Artifact] = Field(
        default_factory=list,
        description="Selected artifacts, in processing order",
    )
    entries: list[ArchiveEntry] = Field(
        default_factory=list,
        description="Extracted archive entries",
    )
    error_message: Optional[str] = Field(
        default=None,
        description="Human-readable failure message (None on success)",
    )
    error_code: Optional[str] = Field(
        default=None,
        description="Error code of the failure (None on success)",
    )
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Run start timestamp (UTC)",
    )
    completed_at: Optional[datetime] = Field(
        default=None,
        description="Run end timestamp (UTC)",
    )

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.SUCCEEDED

    def outputs(self) -> dict[str, Any]:
        """The named outputs reported back to the pipeline."""
        return {
            "found-artifact": self.found_artifact,
            "path": self.path,
        }
