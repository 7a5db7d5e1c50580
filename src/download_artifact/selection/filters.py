"""
download_artifact.selection.filters - Listing Filter
======================================================

Drops artifacts that can't or shouldn't be downloaded before selection:

    - expired artifacts (the service no longer serves them)
    - artifacts whose name doesn't match the name filter, when one is set
"""

from __future__ import annotations

from collections.abc import Iterable

from download_artifact.core.models import Artifact


def is_candidate(artifact: Artifact, name_filter: str = "") -> bool:
    """Whether a single artifact survives the filter."""
    if artifact.expired:
        return False
    return not name_filter or artifact.name == name_filter


def filter_artifacts(artifacts: Iterable[Artifact], name_filter: str = "") -> list[Artifact]:
    """Keep the unexpired artifacts matching the name filter, in listing order.

    Args:
        artifacts: The full listing.
        name_filter: Exact artifact name to keep. Empty keeps every name.

    Returns:
        The surviving artifacts, same objects, same relative order.

    Example:
        >>> [a.name for a in filter_artifacts(listing, name_filter="build-x")]
        ['build-x', 'build-x']
    """
    return [artifact for artifact in artifacts if is_candidate(artifact, name_filter)]
