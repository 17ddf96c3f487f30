"""Output formatting utilities for CLI commands."""

import click

from repo_pager.core.schemas import Repository


def success(message: str) -> None:
    """Print a success message in green."""
    click.secho(f"✓ {message}", fg="green", err=True)


def error(message: str) -> None:
    """Print an error message in red."""
    click.secho(f"✗ {message}", fg="red", err=True)


def info(message: str) -> None:
    """Print an info message in blue."""
    click.secho(f"ℹ {message}", fg="blue", err=True)


def header(message: str) -> None:
    """Print a header message in cyan bold."""
    click.secho(f"\n{message}", fg="cyan", bold=True, err=True)


def repository_line(repo: Repository) -> str:
    """One-line summary: name, stars, forks, open issues."""
    return (
        f"{repo.full_name:<50} "
        f"★ {repo.stargazers.total_count:>6}  "
        f"forks {repo.fork_count:>5}  "
        f"issues {repo.issues.total_count:>5}"
    )
