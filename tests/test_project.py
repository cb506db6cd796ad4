"""Tests for project discovery, scaffolding and the initialization check."""

import tempfile
from pathlib import Path

import pytest

from gddon.errors import NotInitializedError, ProjectNotFoundError
from gddon.project import check_initialization, find_project_root, initialize
from gddon.settings import Settings


def test_find_project_root_from_nested_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir).resolve()
        (root / "project.godot").write_text("")
        nested = root / "scenes" / "levels"
        nested.mkdir(parents=True)

        assert find_project_root(nested) == root


def test_find_project_root_missing_marker():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ProjectNotFoundError):
            find_project_root(tmpdir, marker="no-such-marker.godot")


def test_initialize_creates_default_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        created = initialize(root, Settings())

        assert (root / ".gddon").read_text() == '{\n  "packages": []\n}'
        assert (root / ".gitignore").read_text() == (
            "# Godot-specific ignores\n"
            "*.translation\n"
            "export_presets.cfg\n"
            ".godot/\n"
            ".gddon.d/\n"
        )
        assert (root / ".gddon.d" / ".gdignore").read_text() == (
            "# Ignore everything in this directory\n*\n"
        )
        assert len(created) == 4


def test_initialize_keeps_existing_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / ".gitignore").write_text("custom\n")
        initialize(root, Settings())

        assert (root / ".gitignore").read_text() == "custom\n"
        assert initialize(root, Settings()) == []


def test_check_initialization_reports_missing_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(NotInitializedError) as exc_info:
            check_initialization(tmpdir, Settings())
        assert exc_info.value.missing == [".gddon", ".gddon.d/"]


def test_check_initialization_tolerates_missing_gitignore():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        initialize(root, Settings())
        (root / ".gitignore").unlink()

        check_initialization(root, Settings())
