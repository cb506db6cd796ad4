"""Git operations — clone, fetch, pin and inspect cached package repos."""

from __future__ import annotations

from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from gddon.console import Reporter
from gddon.errors import ConfigError, VCSError


class GitRunner:
    """Runs git commands through GitPython and reports them.

    Every failure surfaces as ``VCSError`` with the git error chained.
    """

    def __init__(self, reporter: Reporter | None = None):
        self.reporter = reporter or Reporter()

    def open(self, path: str | Path) -> Repo:
        try:
            return Repo(path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise VCSError(f"Not a git repository: {path}") from e

    def run(self, repo: Repo, *args: str) -> str:
        """Run ``git <args>`` inside ``repo`` and return its stdout."""
        command = "git " + " ".join(args)
        try:
            output = repo.git.execute(["git", *args])
        except GitCommandError as e:
            self.reporter.command(command, str(e.stderr or "").strip())
            raise VCSError(f"'{command}' failed in {repo.working_dir}: {_reason(e)}") from e
        self.reporter.command(command, output)
        return output

    def clone(self, url: str, dest: str | Path) -> Repo:
        """Clone ``url`` into ``dest``."""
        if not url:
            raise VCSError(f"Nothing to clone into {dest}: repository URL is empty")
        self.reporter.command(f"git clone {url} {Path(dest).name}")
        try:
            return Repo.clone_from(url, dest)
        except GitCommandError as e:
            raise VCSError(f"Couldn't clone repository {url}: {_reason(e)}") from e

    def init(self, path: str | Path) -> Repo:
        self.reporter.command("git init")
        try:
            return Repo.init(path)
        except GitCommandError as e:
            raise VCSError(f"Repository failed to be initialized at {path}: {_reason(e)}") from e

    def has_remote(self, repo: Repo, name: str = "origin") -> bool:
        return name in [r.name for r in repo.remotes]

    def remote_url(self, repo: Repo, name: str = "origin") -> str:
        """Return the fetch URL of a configured remote.

        Raises:
            ConfigError: If the repository has no such remote.
        """
        if not self.has_remote(repo, name):
            raise ConfigError(f"Package repository {repo.working_dir} has no {name} yet!")
        return repo.remotes[name].url

    def fetch_and_pull(self, repo: Repo, remote: str = "origin") -> None:
        """Fetch ``remote`` and fast-forward to its default branch."""
        self.run(repo, "fetch", remote)
        self.run(repo, "pull", "--ff-only", remote, "HEAD")

    def head_revision(self, repo: Repo) -> str:
        try:
            return repo.head.commit.hexsha
        except ValueError as e:
            raise VCSError(f"Couldn't get latest commit of {repo.working_dir}: no commits yet") from e

    def reset_hard(self, repo: Repo, revision: str) -> str:
        """Check the work tree out to ``revision`` and return its full hash."""
        self.run(repo, "reset", "--hard", revision)
        return self.head_revision(repo)


def repo_name_from_url(url: str) -> str:
    """Derive a package name from a repository URL.

    ``https://host/user/my-addon.git`` gives ``my-addon``.
    """
    last = url.rstrip("/").replace(":", "/").split("/")[-1]
    return last[:-4] if last.endswith(".git") else last


def _reason(error: GitCommandError) -> str:
    stderr = str(error.stderr or "").strip()
    return stderr or str(error)
