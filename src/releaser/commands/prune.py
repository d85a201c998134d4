"""Prune-tags command implementation."""

from pathlib import Path

import click
from rich.markup import escape

from releaser.commands.publish import prune_daily_tags
from releaser.core.git import GitError, GitRepository, authenticated_url
from releaser.core.intent import is_daily_tag
from releaser.core.output import console


@click.command("prune-tags")
@click.option("--token", envvar="GITHUB_API_KEY", help="GitHub personal access token")
@click.option("--tag", envvar="TRAVIS_TAG", required=True, help="Daily tag to keep")
@click.option(
    "--build-dir",
    envvar="TRAVIS_BUILD_DIR",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Git working tree",
)
def prune_tags(token: str | None, tag: str, build_dir: Path):
    """Delete every daily tag except TAG, locally and on origin."""
    console.add_secret(token)

    if not token:
        console.print(
            "[red]Error:[/red] You must export the GITHUB_API_KEY containing the "
            "personal access token; no tags were deleted."
        )
        raise SystemExit(1)

    if not is_daily_tag(tag):
        console.print(f"[red]Error:[/red] {escape(tag)} is not a daily tag")
        raise SystemExit(1)

    git = GitRepository(build_dir)
    try:
        remote_url = authenticated_url(git.remote_url(), token)
        deleted = prune_daily_tags(git, tag, remote_url)
    except GitError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    if not deleted:
        console.print(f"No daily tags to prune besides {escape(tag)}")
        return

    console.print(f"[green]✓[/green] Pruned {len(deleted)} daily tag(s), kept [bold]{escape(tag)}[/bold]")
