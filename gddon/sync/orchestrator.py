"""Sync orchestrator — drives the install, add, update, create and apply flows.

Each flow loads the manifest, runs the package through the cache, pinner,
link resolver and directory mirror, and saves the manifest only once every
step has succeeded. Runs are sequential and assume a single gddon process
per project; the manifest and cache are not locked.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from gddon.console import Reporter
from gddon.errors import DuplicatePackageError, FileSystemError, PackageNotFoundError
from gddon.manifest.models import Link, Package, Pin, check_folder_name
from gddon.manifest.store import ManifestStore
from gddon.settings import Settings
from gddon.sync.cache import RepositoryCache
from gddon.sync.links import resolve_links
from gddon.sync.pinner import pin_revision
from gddon.utils.git_ops import GitRunner, repo_name_from_url
from gddon.utils.mirror import clear_tree, copy_tree, list_folders


class SyncOrchestrator:
    """Synchronizes the packages of one project."""

    def __init__(self, root: str | Path, settings: Settings | None = None, reporter: Reporter | None = None):
        self.root = Path(root)
        self.settings = settings or Settings()
        self.reporter = reporter or Reporter(verbose=self.settings.verbose)
        self.git = GitRunner(self.reporter)
        self.store = ManifestStore(self.settings.manifest_path(self.root))
        self.cache = RepositoryCache(self.settings.cache_root(self.root), self.git)

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    def install(self) -> list[Package]:
        """Install every package at its stored pin, then save once."""
        manifest = self.store.load()
        for package in manifest.packages:
            self.reporter.info(f"Installing {package.name}...")
            manifest = manifest.replace(self._sync(package))
        self.store.save(manifest)
        return list(manifest.packages)

    def add(self, origin: str, name: str | None = None, revision: str | None = None) -> Package:
        """Register a new package from ``origin`` and install it.

        Raises:
            InvalidPackageNameError: If the name is not a plain folder name.
            DuplicatePackageError: If the origin or name is already tracked.
        """
        manifest = self.store.load()
        if manifest.find_by_origin(origin) is not None:
            raise DuplicatePackageError("Repository already exists!")

        name = check_folder_name(name or repo_name_from_url(origin))
        if manifest.find(name) is not None:
            raise DuplicatePackageError(f"Addon name '{name}' exists!")

        package = Package(name=name, origin=origin)
        requested = Pin.parse(revision or "")
        manifest = manifest.with_package(package)

        package = self._sync(package, requested=requested)
        self.store.save(manifest.replace(package))
        self.reporter.check(f"Added {package.name} at {package.pin}")
        return package

    def update(self, name: str, revision: str | None = None) -> Package:
        """Move a package to the latest revision, or to ``revision`` if given."""
        manifest = self.store.load()
        if not manifest.packages:
            raise PackageNotFoundError("No addons to update!")
        package = manifest.get(name)

        self.reporter.info(f"Updating {package.name}...")
        requested = Pin.parse(revision) if revision else None
        package = self._sync(package, requested=requested, force_latest=True)
        self.store.save(manifest.replace(package))
        self.reporter.check(f"Updated {package.name} to {package.pin}")
        return package

    def create(self, addon: str, name: str | None = None) -> Package:
        """Start a local package repository from an existing project addon.

        The cache repository is initialized empty, linked to
        ``addons/<addon>`` and filled from the project once.

        Raises:
            InvalidPackageNameError: If the addon or name is not a plain
                folder name.
            FileSystemError: If the project has no such addon folder.
            DuplicatePackageError: If the folder is already linked or the
                name is taken.
        """
        check_folder_name(addon)
        name = check_folder_name(name or addon, kind="Repository")
        manifest = self.store.load()
        addons_dir = self.settings.addons_dir
        folder = str(PurePosixPath(addons_dir) / addon)

        if not (self.root / folder).is_dir():
            raise FileSystemError(f"No addon folder {folder} in the project!")
        if manifest.find_by_target(folder) is not None:
            raise DuplicatePackageError("There is a repository linked to that addon already!")

        if manifest.find(name) is not None:
            raise DuplicatePackageError(f"Addon name '{name}' exists!")

        repo_path = self.cache.path_for(Package(name=name))
        try:
            (repo_path / folder).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"Repository folder failed to be created: {e}") from e
        self.git.init(repo_path)

        package = Package(name=name, links=(Link(source_folder=folder, target_folder=folder),))
        manifest = manifest.with_package(package)
        self._push_to_cache(package)
        self.store.save(manifest)
        self.reporter.check(f"Created repository {name} in {self.settings.cache_dir}")
        return package

    def apply(self, name: str) -> Package:
        """Overwrite the cached repository folders with the project's copy.

        Nothing is committed; the changes are left in the cache work tree.
        """
        manifest = self.store.load()
        if not manifest.packages:
            raise PackageNotFoundError("No addons to apply changes!")
        package = manifest.get(name)

        self._push_to_cache(package)
        self.store.save(manifest)
        self.reporter.check(f"Applied project changes to {package.name}")
        return package

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def packages(self) -> list[Package]:
        return list(self.store.load().packages)

    def project_addons(self) -> list[str]:
        """Addon folders present in the project, for ``create``."""
        return list_folders(self.root / self.settings.addons_dir)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _sync(self, package: Package, requested: Pin | None = None, force_latest: bool = False) -> Package:
        """Cached -> Pinned -> Linked -> Materialized for one package."""
        package = self.cache.ensure(package)
        repo_path = self.cache.path_for(package)

        revision = pin_revision(self.git, repo_path, package, requested, force_latest)
        links = resolve_links(repo_path, package, self.settings.addons_dir)
        package = package.evolve(pin=Pin.at(revision), links=links)

        for link in package.links:
            copy_tree(repo_path / link.source_folder, self.root / link.target_folder)
        return package

    def _push_to_cache(self, package: Package) -> None:
        repo_path = self.cache.path_for(package)
        for link in package.links:
            if not (self.root / link.target_folder).is_dir():
                raise FileSystemError(
                    f"Project folder {link.target_folder} is missing, nothing applied to {package.name}"
                )
        for link in package.links:
            source = repo_path / link.source_folder
            clear_tree(source)
            copy_tree(self.root / link.target_folder, source)
