"""Project scaffolding — root discovery, ``init`` files, initialization check."""

from __future__ import annotations

from pathlib import Path

from gddon.console import Reporter
from gddon.errors import FileSystemError, NotInitializedError, ProjectNotFoundError
from gddon.manifest.store import DEFAULT_MANIFEST, dumps
from gddon.settings import Settings

# ---------------------------------------------------------------------------
# Templates for files created by ``gddon init``
# ---------------------------------------------------------------------------

GITIGNORE_TEMPLATE = """\
# Godot-specific ignores
*.translation
export_presets.cfg
.godot/
{cache_dir}/
"""

GDIGNORE_TEMPLATE = """\
# Ignore everything in this directory
*
"""


def find_project_root(start: str | Path | None = None, marker: str = "project.godot") -> Path:
    """Search ``start`` and its parents for the Godot project marker.

    Raises:
        ProjectNotFoundError: If no directory up to the filesystem root has it.
    """
    current = Path(start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / marker).is_file():
            return candidate
    raise ProjectNotFoundError(f"Godot project not found! (no {marker} above {current})")


def initialize(root: str | Path, settings: Settings, reporter: Reporter | None = None) -> list[Path]:
    """Create the gddon files that are missing. Existing files are kept.

    Returns:
        The paths that were created.
    """
    root = Path(root)
    reporter = reporter or Reporter(verbose=settings.verbose)
    created: list[Path] = []

    cache_root = settings.cache_root(root)
    if not cache_root.exists():
        _mkdir(cache_root)
        created.append(cache_root)
        reporter.info(f"Created {settings.cache_dir}/ folder")

    gdignore = cache_root / ".gdignore"
    if not gdignore.exists():
        _write(gdignore, GDIGNORE_TEMPLATE)
        created.append(gdignore)

    manifest = settings.manifest_path(root)
    if not manifest.exists():
        _write(manifest, dumps(DEFAULT_MANIFEST))
        created.append(manifest)
        reporter.info(f"Created {settings.manifest_name} file")

    gitignore = root / ".gitignore"
    if not gitignore.exists():
        _write(gitignore, GITIGNORE_TEMPLATE.format(cache_dir=settings.cache_dir))
        created.append(gitignore)
        reporter.info("Created .gitignore file")

    return created


def check_initialization(root: str | Path, settings: Settings, reporter: Reporter | None = None) -> None:
    """Verify the scaffolding exists before a mutating command runs.

    A missing ``.gitignore`` is only reported.

    Raises:
        NotInitializedError: If the manifest or the cache folder is missing.
    """
    root = Path(root)
    reporter = reporter or Reporter(verbose=settings.verbose)

    if not (root / ".gitignore").exists():
        reporter.warn(".gitignore file does not exist!")

    missing = []
    if not settings.manifest_path(root).is_file():
        missing.append(settings.manifest_name)
    if not settings.cache_root(root).is_dir():
        missing.append(f"{settings.cache_dir}/")
    if missing:
        raise NotInitializedError(missing)


def _mkdir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileSystemError(f"Couldn't create {path.name}/ folder: {e}") from e


def _write(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileSystemError(f"There was a problem creating the {path.name} file: {e}") from e
