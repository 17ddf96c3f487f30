"""Configuration management commands."""

import json

import click

from repo_pager.cli.utils import info
from repo_pager.core.settings import get_github_settings, get_logging_settings


@click.group(name="config")
def config() -> None:
    """Configuration management commands."""


@config.command()
@click.option(
    "--show-secrets/--hide-secrets",
    default=False,
    help="Show sensitive values (tokens)",
)
def show(show_secrets: bool) -> None:
    """Display current configuration settings."""
    github = get_github_settings()
    logs = get_logging_settings()

    if not show_secrets:
        info("Secrets are hidden. Use --show-secrets to display them.")

    token = "(unset)"
    if github.has_token:
        token = github.token.get_secret_value() if show_secrets else "***"  # type: ignore[union-attr]

    config_dict = {
        "github": {
            **github.model_dump(exclude={"token"}),
            "token": token,
        },
        "logging": logs.model_dump(),
    }
    click.echo(json.dumps(config_dict, indent=2))
