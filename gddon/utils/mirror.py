"""Directory mirror — recursive copy and clear over a directory tree.

``copy_tree`` is additive: files present only in the destination are kept.
Neither operation is transactional; a failure can leave a partial result.
"""

from __future__ import annotations

import shutil
import stat
from pathlib import Path

from gddon.errors import FileSystemError


def copy_tree(src: str | Path, dst: str | Path) -> None:
    """Copy every file and sub-directory of ``src`` into ``dst``.

    ``dst`` is created with the mode of ``src`` when missing. Same-named files
    are overwritten and keep the permission bits of their source.

    Raises:
        FileSystemError: If ``src`` is missing or unreadable, or a copy fails.
    """
    src, dst = Path(src), Path(dst)
    try:
        mode = stat.S_IMODE(src.stat().st_mode)
        if not src.is_dir():
            raise FileSystemError(f"Not a directory: {src}")
        dst.mkdir(mode=mode, parents=True, exist_ok=True)
        entries = sorted(src.iterdir())
    except OSError as e:
        raise FileSystemError(f"Couldn't read {src}: {e}") from e

    for entry in entries:
        target = dst / entry.name
        if entry.is_dir():
            copy_tree(entry, target)
        else:
            _copy_file(entry, target)


def _copy_file(src: Path, dst: Path) -> None:
    try:
        if dst.is_dir() and not dst.is_symlink():
            raise FileSystemError(f"Cannot overwrite directory {dst} with a file")
        if dst.is_symlink():
            dst.unlink()
        shutil.copyfile(src, dst)
        shutil.copymode(src, dst)
    except OSError as e:
        raise FileSystemError(f"Couldn't copy {src} to {dst}: {e}") from e


def clear_tree(directory: str | Path) -> None:
    """Remove everything inside ``directory`` but keep the directory itself.

    Raises:
        FileSystemError: If the directory is unreadable or an entry cannot be
            removed.
    """
    directory = Path(directory)
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise FileSystemError(f"Couldn't read {directory}: {e}") from e

    for entry in entries:
        try:
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
        except OSError as e:
            raise FileSystemError(f"Couldn't remove {entry}: {e}") from e


def list_folders(directory: str | Path) -> list[str]:
    """Return the names of the immediate sub-directories, sorted.

    A missing directory has no folders.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    try:
        return sorted(entry.name for entry in directory.iterdir() if entry.is_dir())
    except OSError as e:
        raise FileSystemError(f"Couldn't read {directory}: {e}") from e
