"""
Tests for download_artifact.infrastructure.extractor
=======================================================

These tests verify archive extraction:
    - Destination derivation with and without a name filter
    - Entry reporting (creating / inflating) in archive order
    - Overwrite semantics and idempotent directory creation
    - Error mapping for unreadable archives and unwritable paths
"""

import os
from pathlib import Path

import pytest

from tests.conftest import make_artifact, make_zip

from download_artifact.core.enums import EntryAction
from download_artifact.core.exceptions import ArchiveError, FilesystemError
from download_artifact.infrastructure.extractor import (
    FALLBACK_DIRECTORY_NAME,
    ArchiveExtractor,
    entry_destination,
    resolve_destination,
)


# =============================================================================
# Test: resolve_destination
# =============================================================================
class TestResolveDestination:
    """Tests for destination derivation."""

    def test_without_filter_uses_artifact_name(self) -> None:
        artifact = make_artifact(1, "build-x")
        assert resolve_destination("out", artifact) == Path("out") / "build-x"

    def test_with_filter_uses_base_path(self) -> None:
        artifact = make_artifact(1, "build-x")
        assert resolve_destination("out", artifact, name_filter="build-x") == Path("out")

    def test_missing_name_falls_back(self) -> None:
        artifact = make_artifact(1, None)
        assert resolve_destination("out", artifact) == Path("out") / FALLBACK_DIRECTORY_NAME
        assert FALLBACK_DIRECTORY_NAME == "artifact"

    def test_accepts_path_objects(self, tmp_path) -> None:
        artifact = make_artifact(1, "a")
        assert resolve_destination(tmp_path, artifact) == tmp_path / "a"


# =============================================================================
# Test: entry_destination
# =============================================================================
class TestEntryDestination:
    """Tests for the on-disk path of a single archive entry."""

    def test_plain_entry(self, tmp_path) -> None:
        assert entry_destination(tmp_path, "dist/app.txt") == str(tmp_path / "dist" / "app.txt")

    def test_directory_entry(self, tmp_path) -> None:
        assert entry_destination(tmp_path, "dist/") == str(tmp_path / "dist")

    def test_absolute_name_stays_inside(self, tmp_path) -> None:
        assert entry_destination(tmp_path, "/abs/f.txt") == str(tmp_path / "abs" / "f.txt")

    def test_parent_segments_dropped(self, tmp_path) -> None:
        assert entry_destination(tmp_path, "../../x/./f.txt") == str(tmp_path / "x" / "f.txt")


# =============================================================================
# Test: ArchiveExtractor
# =============================================================================
class TestArchiveExtractor:
    """Tests for ArchiveExtractor.extract()."""

    @pytest.fixture
    def extractor(self) -> ArchiveExtractor:
        return ArchiveExtractor()

    def test_extracts_files_and_directories(self, extractor, tmp_path) -> None:
        content = make_zip(
            {"dist/app.txt": "app", "README.md": "readme"},
            directories=["dist/"],
        )
        destination = tmp_path / "out" / "build-x"

        entries = extractor.extract(content, destination)

        assert (destination / "dist" / "app.txt").read_text() == "app"
        assert (destination / "README.md").read_text() == "readme"
        assert [e.name for e in entries] == ["dist/", "dist/app.txt", "README.md"]
        assert [e.action for e in entries] == [
            EntryAction.CREATING,
            EntryAction.INFLATING,
            EntryAction.INFLATING,
        ]
        assert entries[1].destination.endswith("app.txt")
        assert entries[1].destination.startswith(str(destination))

    def test_creates_missing_parents(self, extractor, tmp_path) -> None:
        destination = tmp_path / "deep" / "nested" / "dir"
        extractor.extract(make_zip({"f.txt": "x"}), destination)
        assert (destination / "f.txt").exists()

    def test_overwrites_existing_files(self, extractor, tmp_path) -> None:
        destination = tmp_path / "out"
        destination.mkdir()
        (destination / "f.txt").write_text("stale")

        extractor.extract(make_zip({"f.txt": "fresh"}), destination)

        assert (destination / "f.txt").read_text() == "fresh"

    def test_existing_destination_is_fine(self, extractor, tmp_path) -> None:
        destination = tmp_path / "out"
        extractor.ensure_directory(destination)
        extractor.ensure_directory(destination)
        extractor.extract(make_zip({"a.txt": "1"}), destination)
        extractor.extract(make_zip({"b.txt": "2"}), destination)
        assert sorted(p.name for p in destination.iterdir()) == ["a.txt", "b.txt"]

    def test_empty_archive(self, extractor, tmp_path) -> None:
        destination = tmp_path / "out"
        assert extractor.extract(make_zip({}), destination) == []
        assert destination.is_dir()

    def test_absolute_entry_reported_where_written(self, extractor, tmp_path) -> None:
        destination = tmp_path / "out"

        entries = extractor.extract(make_zip({"/abs/f.txt": "x", "../up.txt": "y"}), destination)

        assert [e.destination for e in entries] == [
            str(destination / "abs" / "f.txt"),
            str(destination / "up.txt"),
        ]
        for entry in entries:
            assert entry.destination.startswith(str(destination))
            assert os.path.isfile(entry.destination)
        assert not (tmp_path / "up.txt").exists()

    def test_invalid_archive_raises(self, extractor, tmp_path) -> None:
        with pytest.raises(ArchiveError) as exc_info:
            extractor.extract(b"this is not a zip file", tmp_path / "out")
        assert exc_info.value.error_code == "ARCHIVE_ERROR"

    def test_unwritable_destination_raises(self, extractor, tmp_path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")

        with pytest.raises(FilesystemError) as exc_info:
            extractor.extract(make_zip({"f.txt": "x"}), blocker / "out")
        assert exc_info.value.path == str(blocker / "out")
