"""User lookup commands."""

import click

from repo_pager.cli.commands.errors import handle_errors
from repo_pager.cli.utils import coro
from repo_pager.infra.external.github_client import GitHubGraphQLClient


@click.command(name="whoami")
@coro
@handle_errors
async def whoami() -> None:
    """Show the authenticated user."""
    async with GitHubGraphQLClient.from_settings() as client:
        viewer = await client.get_current_user_info()

    click.echo(viewer.login)
    if viewer.name:
        click.echo(f"name:   {viewer.name}")
    if viewer.avatar_url:
        click.echo(f"avatar: {viewer.avatar_url}")


@click.command(name="user")
@click.argument("login")
@coro
@handle_errors
async def user(login: str) -> None:
    """Show LOGIN's profile."""
    async with GitHubGraphQLClient.from_settings() as client:
        profile = await client.get_user(login)

    click.echo(profile.login)
    for label, value in (
        ("name", profile.name),
        ("company", profile.company),
        ("created", profile.created_at.date().isoformat() if profile.created_at else None),
    ):
        if value:
            click.echo(f"{label + ':':<12}{value}")
    click.echo(f"{'followers:':<12}{profile.followers.total_count}")
    click.echo(f"{'repos:':<12}{profile.repositories.total_count}")
    click.echo(f"{'gists:':<12}{profile.gists.total_count}")
