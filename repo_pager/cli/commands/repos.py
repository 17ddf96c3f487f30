"""Repository listing commands."""

import json

import click

from repo_pager.cli.commands.errors import handle_errors
from repo_pager.cli.utils import coro, header, info, repository_line, success
from repo_pager.infra.external.github_client import GitHubGraphQLClient


@click.command(name="repos")
@click.argument("owner")
@click.option(
    "--page-size",
    type=click.IntRange(1, 100),
    default=None,
    help="Repositories per request (default from GITHUB_PAGE_SIZE)",
)
@click.option(
    "--max-pages",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many pages",
)
@click.option("--json", "as_json", is_flag=True, help="Emit one JSON object per repository")
@coro
@handle_errors
async def repos(owner: str, page_size: int | None, max_pages: int | None, as_json: bool) -> None:
    """List OWNER's repositories, printing each page as it arrives."""
    total = 0
    async with GitHubGraphQLClient.from_settings() as client:
        session = client.get_repositories(owner, page_size)
        async for page in session:
            if not as_json:
                header(f"Page {session.state.pages_fetched} ({len(page.items)} repositories)")
            for repo in page.items:
                if as_json:
                    click.echo(json.dumps(repo.model_dump(mode="json", by_alias=True)))
                else:
                    click.echo(repository_line(repo))
            total += len(page.items)
            if max_pages is not None and session.state.pages_fetched >= max_pages:
                if page.page_info.has_next_page:
                    info(f"Stopped after {max_pages} page(s); more repositories remain")
                break

    if not as_json:
        success(f"{total} repositories")


@click.command(name="repo")
@click.argument("owner")
@click.argument("name")
@click.option(
    "--issues",
    type=click.IntRange(0, 100),
    default=10,
    show_default=True,
    help="Most recent issues to include",
)
@coro
@handle_errors
async def repo(owner: str, name: str, issues: int) -> None:
    """Show one repository and its most recent issues."""
    async with GitHubGraphQLClient.from_settings() as client:
        repository = await client.get_repository(owner, name, issues)

    click.echo(repository_line(repository))
    if repository.description:
        click.echo(f"  {repository.description}")
    for issue in repository.issues.nodes:
        click.echo(f"  [{issue.state or '?'}] {issue.title}")
