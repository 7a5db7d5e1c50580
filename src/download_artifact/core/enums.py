"""
download_artifact.core.enums - Type-Safe Enumerations
=======================================================

Enumerations shared across the downloader. All enums inherit from both
`str` and `Enum`, so they serialize to plain strings and compare equal to
their values:

    >>> ArchiveFormat.ZIP == "zip"
    True
"""

from enum import Enum


# =============================================================================
# Archive Format
# =============================================================================
# The download-resolution endpoint takes the archive format as a path
# segment: /repos/{owner}/{repo}/actions/artifacts/{id}/{format}
# GitHub only serves zip archives for workflow artifacts.
# =============================================================================
class ArchiveFormat(str, Enum):
    """Archive formats accepted by the download-resolution endpoint."""

    ZIP = "zip"


# =============================================================================
# Entry Action
# =============================================================================
# Logged for every archive entry before it is written to disk, mirroring
# the wording of the classic `unzip` tool.
# =============================================================================
class EntryAction(str, Enum):
    """What extraction does with a single archive entry.

    Usage:
        >>> EntryAction.for_entry(is_dir=True)
        <EntryAction.CREATING: 'creating'>
    """

    CREATING = "creating"       # Directory entry
    INFLATING = "inflating"     # File entry

    @classmethod
    def for_entry(cls, is_dir: bool) -> "EntryAction":
        return cls.CREATING if is_dir else cls.INFLATING


# =============================================================================
# Run Status
# =============================================================================
class RunStatus(str, Enum):
    """Final status of one downloader invocation.

    SUCCEEDED covers both "artifacts downloaded" and "no artifacts found";
    the found_artifact flag of the result tells them apart.
    """

    SUCCEEDED = "succeeded"
    FAILED = "failed"
