"""
download_artifact.selection.selector - Latest-Artifact Selection
==================================================================

Reduces the filtered listing to the artifacts that will be downloaded.
Each workflow run uploads its own artifact, so a repository typically holds
many artifacts sharing a name; only the most recently updated one of each
name is wanted.

Selection Passes:
    Pass A (latest-only mode):  whole list   → [single latest artifact]
    Pass B (always):            working set  → one latest artifact per name

    filtered ──(latest?)──→ Pass A ──→ Pass B ──→ selection set
        │                               ↑
        └──────────(not latest)─────────┘

Latest Rule:
    A left fold over the list: the running best is replaced only by a
    candidate whose timestamp is strictly greater. Ties keep the element
    seen first, and artifacts without a timestamp sort below every
    artifact that has one.

Usage:
    >>> selected = select_artifacts(filter_artifacts(listing), latest=False)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

import structlog

from download_artifact.core.models import Artifact


# =============================================================================
# Logger
# =============================================================================
logger = structlog.get_logger()


def get_latest(artifacts: Sequence[Artifact]) -> Artifact:
    """Return the most recently updated artifact.

    Args:
        artifacts: Non-empty list of candidates.

    Returns:
        The first artifact holding the greatest timestamp.

    Raises:
        ValueError: If the list is empty.

    Example:
        >>> get_latest([a_t1, b_t2, c_t2]) is b_t2
        True
    """
    if not artifacts:
        raise ValueError("get_latest() requires at least one artifact")

    best = artifacts[0]
    for candidate in artifacts[1:]:
        if candidate.sort_key > best.sort_key:
            best = candidate
    return best


def select_global_latest(artifacts: Sequence[Artifact]) -> list[Artifact]:
    """Pass A: narrow the list to its single latest artifact."""
    if not artifacts:
        return []
    return [get_latest(artifacts)]


def group_latest_by_name(artifacts: Sequence[Artifact]) -> list[Artifact]:
    """Pass B: keep the latest artifact of each distinct name.

    Groups are keyed by exact name equality (an absent name is a group of
    its own) and come out in the order their first member was seen.
    """
    groups: dict[Optional[str], list[Artifact]] = {}
    for artifact in artifacts:
        groups.setdefault(artifact.name, []).append(artifact)
    return [get_latest(group) for group in groups.values()]


def select_artifacts(artifacts: Sequence[Artifact], latest: bool = False) -> list[Artifact]:
    """Run both selection passes over the filtered listing.

    Args:
        artifacts: Output of the filter stage.
        latest: Run Pass A first, keeping at most one artifact overall.

    Returns:
        The selection set: at most one artifact per distinct name, and at
        most one artifact in total when latest is set. Empty input yields
        an empty list.
    """
    if not artifacts:
        return []

    working = list(artifacts)
    if latest:
        working = select_global_latest(working)
        logger.info(
            "latest_artifact_selected",
            artifact_id=working[0].id,
            artifact_name=working[0].name,
        )

    return group_latest_by_name(working)
