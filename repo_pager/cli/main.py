"""Main CLI entry point for repo-pager."""

import click

from repo_pager import __version__
from repo_pager.cli.commands import config, repos, users
from repo_pager.infra.logging.config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="repo-pager")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """repo-pager - browse GitHub repositories through the GraphQL API.

    \b
    Authentication:
      GITHUB_TOKEN       bearer token (required unless demo mode)
      GITHUB_DEMO_MODE   serve fabricated data without network access

    \b
    Quick Start:
      repo-pager whoami
      repo-pager repos octocat --page-size 50
      repo-pager repo octocat Hello-World --issues 5
    """
    ctx.ensure_object(dict)
    overrides = {"log_level": log_level.upper()} if log_level else {}
    setup_logging(force=bool(overrides), **overrides)


cli.add_command(repos.repos)
cli.add_command(repos.repo)
cli.add_command(users.whoami)
cli.add_command(users.user)
cli.add_command(config.config)


def main() -> None:
    """Entry point for the console script."""
    cli(obj={})


if __name__ == "__main__":
    main()
