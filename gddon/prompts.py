"""Interactive prompts for the command line."""

from __future__ import annotations

import click

from gddon.console import console


def prompt_text(prompt: str, default: str) -> str:
    """Ask for a value, returning ``default`` on an empty answer."""
    return click.prompt(prompt, default=default, show_default=True).strip() or default


def prompt_select(prompt: str, options: list[str]) -> str:
    """Show a numbered list and return the chosen option."""
    console.print(f"[bold]{prompt}[/]")
    for i, option in enumerate(options, start=1):
        console.print(f"  {i}. {option}", highlight=False)
    choice = click.prompt(
        f"Enter your choice (1-{len(options)})",
        type=click.IntRange(1, len(options)),
    )
    return options[choice - 1]
