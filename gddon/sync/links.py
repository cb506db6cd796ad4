"""Link resolver — derives the folder mapping of a package."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from gddon.errors import AmbiguousAddonError
from gddon.manifest.models import Link, Package
from gddon.utils.mirror import list_folders


def resolve_links(repo_path: str | Path, package: Package, addons_dir: str = "addons") -> tuple[Link, ...]:
    """Return the package links, inferring one when none are configured.

    The single folder ``X`` under the repository's addons directory maps to
    the project's ``addons/X``.

    Raises:
        AmbiguousAddonError: If there are zero or several candidate folders.
    """
    if package.links:
        return package.links

    candidates = list_folders(Path(repo_path) / addons_dir)
    if len(candidates) != 1:
        raise AmbiguousAddonError(package.name, candidates)

    folder = str(PurePosixPath(addons_dir) / candidates[0])
    return (Link(source_folder=folder, target_folder=folder),)
