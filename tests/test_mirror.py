"""Tests for the directory mirror primitives."""

import os
import stat
import tempfile
from pathlib import Path

import pytest

from gddon.errors import FileSystemError
from gddon.utils.mirror import clear_tree, copy_tree, list_folders


def _build_source(root: Path) -> Path:
    src = root / "src"
    (src / "nested" / "deeper").mkdir(parents=True)
    (src / "plugin.cfg").write_text("[plugin]\n")
    (src / "nested" / "script.gd").write_text("extends Node\n")
    (src / "nested" / "deeper" / "tool.sh").write_text("#!/bin/sh\n")
    os.chmod(src / "nested" / "deeper" / "tool.sh", 0o755)
    return src


def test_copy_tree_copies_everything():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        src = _build_source(root)
        dst = root / "out" / "addon"

        copy_tree(src, dst)

        assert (dst / "plugin.cfg").read_text() == "[plugin]\n"
        assert (dst / "nested" / "script.gd").read_text() == "extends Node\n"
        assert (dst / "nested" / "deeper" / "tool.sh").exists()


def test_copy_tree_preserves_permission_bits():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        src = _build_source(root)
        dst = root / "dst"

        copy_tree(src, dst)

        mode = stat.S_IMODE((dst / "nested" / "deeper" / "tool.sh").stat().st_mode)
        assert mode == 0o755


def test_copy_tree_overwrites_but_never_deletes():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        src = _build_source(root)
        dst = root / "dst"
        (dst / "nested").mkdir(parents=True)
        (dst / "plugin.cfg").write_text("old\n")
        (dst / "keep.txt").write_text("mine\n")
        (dst / "nested" / "local.gd").write_text("local\n")

        copy_tree(src, dst)

        assert (dst / "plugin.cfg").read_text() == "[plugin]\n"
        assert (dst / "keep.txt").read_text() == "mine\n"
        assert (dst / "nested" / "local.gd").read_text() == "local\n"


def test_copy_tree_missing_source():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(FileSystemError):
            copy_tree(Path(tmpdir) / "missing", Path(tmpdir) / "dst")


def test_clear_tree_empties_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        src = _build_source(Path(tmpdir))

        clear_tree(src)

        assert src.is_dir()
        assert list(src.iterdir()) == []


def test_clear_tree_missing_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(FileSystemError):
            clear_tree(Path(tmpdir) / "missing")


def test_list_folders_ignores_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "b_addon").mkdir()
        (root / "a_addon").mkdir()
        (root / "README.md").write_text("readme")

        assert list_folders(root) == ["a_addon", "b_addon"]
        assert list_folders(root / "missing") == []
