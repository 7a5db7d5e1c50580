"""
download_artifact.selection - Filter and Selector Stages
==========================================================

Pure functions turning the full artifact listing into the selection set:

    filter_artifacts()  → drop expired / non-matching artifacts
    select_artifacts()  → optional global latest, then latest per name
"""

from download_artifact.selection.filters import filter_artifacts, is_candidate
from download_artifact.selection.selector import (
    get_latest,
    group_latest_by_name,
    select_artifacts,
    select_global_latest,
)

__all__ = [
    "filter_artifacts",
    "is_candidate",
    "get_latest",
    "group_latest_by_name",
    "select_artifacts",
    "select_global_latest",
]
