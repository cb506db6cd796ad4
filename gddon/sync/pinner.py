"""Revision pinner — turns a pin into a concrete checked-out revision."""

from __future__ import annotations

from pathlib import Path

from gddon.manifest.models import Package, Pin
from gddon.utils.git_ops import GitRunner


def effective_pin(package: Package, requested: Pin | None = None, force_latest: bool = False) -> Pin:
    """Pick the pin to apply: a concrete request wins, then ``force_latest``,
    then the stored pin."""
    if requested is not None and not requested.is_latest:
        return requested
    if force_latest:
        return Pin.latest()
    if requested is not None:
        return requested
    return package.pin


def pin_revision(
    git: GitRunner,
    repo_path: str | Path,
    package: Package,
    requested: Pin | None = None,
    force_latest: bool = False,
) -> str:
    """Check the cached repository out to the effective pin.

    ``latest`` resolves to the current ``HEAD`` without a checkout, since the
    cache was just fast-forwarded. A concrete pin hard-resets the work tree.

    Returns:
        The full revision hash now checked out.

    Raises:
        VCSError: If the revision does not exist or the repo has no commits.
    """
    repo = git.open(repo_path)
    pin = effective_pin(package, requested, force_latest)

    if pin.is_latest:
        return git.head_revision(repo)

    git.reporter.info(f"Git checkout to package commit {pin.revision}")
    return git.reset_hard(repo, pin.revision)
