"""Repository cache — one local clone per package under the cache root."""

from __future__ import annotations

from pathlib import Path

from gddon.console import Reporter
from gddon.errors import ConfigError, FileSystemError
from gddon.manifest.models import Package, check_folder_name
from gddon.utils.git_ops import GitRunner


class RepositoryCache:
    """Keeps ``<cache_root>/<package name>`` in step with the package origin."""

    def __init__(self, cache_root: str | Path, git: GitRunner | None = None):
        self.cache_root = Path(cache_root)
        self.git = git or GitRunner()

    @property
    def reporter(self) -> Reporter:
        return self.git.reporter

    def path_for(self, package: Package) -> Path:
        return self.cache_root / check_folder_name(package.name, kind="Package")

    def ensure(self, package: Package) -> Package:
        """Clone the package on first use, fetch and fast-forward afterwards.

        A package without an origin gets it back from the existing clone's
        ``origin`` remote.

        Returns:
            The package with its concrete origin filled in.

        Raises:
            VCSError: If cloning, fetching or pulling fails.
            ConfigError: If the origin is unknown and the clone has no remote,
                or the clone tracks a different origin than the package.
        """
        path = self.path_for(package)

        if not path.exists():
            try:
                self.cache_root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FileSystemError(f"Couldn't create {self.cache_root.name}/ folder: {e}") from e
            self.git.clone(package.origin, path)
            self.reporter.check(f"Created package folder on {self.cache_root.name}")
            return package

        repo = self.git.open(path)
        if not package.origin:
            package = package.evolve(origin=self.git.remote_url(repo))
        elif self.git.has_remote(repo):
            remote = self.git.remote_url(repo)
            if remote != package.origin:
                raise ConfigError(
                    f"Package folder {path} tracks {remote}, but the manifest says {package.origin}"
                )

        self.git.fetch_and_pull(repo)
        self.reporter.info(
            f"{package.name} package folder already exists, fetched and pulled latest changes"
        )
        return package

