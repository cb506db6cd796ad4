"""gddon CLI — the main entry point for the Godot addon package manager."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import click
from rich.table import Table

from gddon import __version__
from gddon.console import Reporter, console
from gddon.errors import GddonError, PackageNotFoundError
from gddon.prompts import prompt_select, prompt_text
from gddon.settings import Settings, load_settings
from gddon.utils.git_ops import repo_name_from_url


@dataclass
class Session:
    """What every sub-command needs: project root, settings and reporter."""

    root: Path
    settings: Settings
    reporter: Reporter

    def orchestrator(self):
        from gddon.sync.orchestrator import SyncOrchestrator

        return SyncOrchestrator(self.root, self.settings, self.reporter)


def _open_session(verbose: bool, check: bool = True) -> Session:
    from gddon.project import check_initialization, find_project_root

    user_settings = load_settings()
    root = find_project_root(marker=user_settings.project_marker)
    settings = load_settings(root, verbose=verbose or None)
    reporter = Reporter(verbose=settings.verbose)
    reporter.check(f"Found root project in: {root}")
    if check:
        check_initialization(root, settings, reporter)
    return Session(root=root, settings=settings, reporter=reporter)


def _fail(error: GddonError) -> None:
    Reporter().error(str(error))
    sys.exit(1)


def _select_package(session: Session, name: str | None, prompt: str, empty: str) -> str:
    if name:
        return name
    names = [p.name for p in session.orchestrator().packages()]
    if not names:
        raise PackageNotFoundError(empty)
    return prompt_select(prompt, names)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    envvar="GDDON_VERBOSE",
    help="Verbose (output git commands)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """Gddon — Godot Library Addon Manager.

    Tracks addons as git repositories pinned to a commit, installs them
    into the project's addons folder, and applies local edits back.
    """
    ctx.obj = {"verbose": verbose}


# ── Init ─────────────────────────────────────────────────────────────


@main.command()
@click.pass_obj
def init(obj: dict):
    """Initialize Godot project for gddon."""
    from gddon.project import initialize

    try:
        session = _open_session(obj["verbose"], check=False)
        created = initialize(session.root, session.settings, session.reporter)
    except GddonError as e:
        _fail(e)

    if not created:
        console.print("[yellow]Project already initialized.[/]")


# ── Add ──────────────────────────────────────────────────────────────


@main.command()
@click.argument("git_repo")
@click.option("--name", "-n", default=None, help="Name of the addon (prompted if omitted)")
@click.option("--commit", "-c", default=None, help="Commit to pin (prompted if omitted)")
@click.pass_obj
def add(obj: dict, git_repo: str, name: str | None, commit: str | None):
    """Add new repository."""
    try:
        session = _open_session(obj["verbose"])
        if name is None:
            name = prompt_text("Name of the addon", repo_name_from_url(git_repo))
        if commit is None:
            commit = prompt_text("Commit hash of the repository", "latest")
        session.orchestrator().add(git_repo, name=name, revision=commit)
    except GddonError as e:
        _fail(e)


# ── Create ───────────────────────────────────────────────────────────


@main.command()
@click.argument("addon", required=False)
@click.option("--name", "-n", default=None, help="Name of the repository (prompted if omitted)")
@click.pass_obj
def create(obj: dict, addon: str | None, name: str | None):
    """Create a repository from an existing addon."""
    try:
        session = _open_session(obj["verbose"])
        orchestrator = session.orchestrator()
        if addon is None:
            folders = orchestrator.project_addons()
            if not folders:
                raise PackageNotFoundError("No addons found in the project!")
            addon = prompt_select("Which addon you'll create a repository?", folders)
        if name is None:
            name = prompt_text("Name of the repository", addon)
        orchestrator.create(addon, name=name)
    except GddonError as e:
        _fail(e)


# ── Update ───────────────────────────────────────────────────────────


@main.command()
@click.argument("name", required=False)
@click.option("--commit", "-c", default=None, help="Pin to this commit instead of the latest")
@click.pass_obj
def update(obj: dict, name: str | None, commit: str | None):
    """Update a repository."""
    try:
        session = _open_session(obj["verbose"])
        name = _select_package(
            session, name, "Which addon you want to update?", "No addons to update!"
        )
        session.orchestrator().update(name, revision=commit)
    except GddonError as e:
        _fail(e)


# ── Install ──────────────────────────────────────────────────────────


@main.command()
@click.pass_obj
def install(obj: dict):
    """Install all addons on gddon file."""
    try:
        session = _open_session(obj["verbose"])
        packages = session.orchestrator().install()
    except GddonError as e:
        _fail(e)

    console.print(f"\n[green]Installed {len(packages)} addon(s).[/]")


# ── Apply ────────────────────────────────────────────────────────────


@main.command()
@click.argument("name", required=False)
@click.pass_obj
def apply(obj: dict, name: str | None):
    """Apply changes to a repository."""
    try:
        session = _open_session(obj["verbose"])
        name = _select_package(
            session, name, "Which addon you want to apply changes?", "No addons to apply changes!"
        )
        session.orchestrator().apply(name)
    except GddonError as e:
        _fail(e)


# ── List ─────────────────────────────────────────────────────────────


@main.command(name="list")
@click.pass_obj
def list_packages(obj: dict):
    """List the addons tracked in the gddon file."""
    try:
        session = _open_session(obj["verbose"])
        packages = session.orchestrator().packages()
    except GddonError as e:
        _fail(e)

    if not packages:
        console.print("[yellow]No addons tracked yet.[/]")
        return

    table = Table(title=f"Addons ({len(packages)} tracked)")
    table.add_column("Name", style="cyan")
    table.add_column("Commit", style="green")
    table.add_column("Repository")
    table.add_column("Links")

    for package in packages:
        table.add_row(
            package.name,
            str(package.pin)[:12],
            package.origin or "[dim](no origin)[/]",
            ", ".join(link.target_folder for link in package.links),
        )

    console.print(table)


if __name__ == "__main__":
    main()
