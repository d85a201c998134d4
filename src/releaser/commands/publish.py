"""Publish command implementation."""

from dataclasses import dataclass, field
from pathlib import Path

import click
from rich.markup import escape

from releaser.core.config import DEFAULT_TIMEOUT, ConfigError, PublisherConfig
from releaser.core.git import GitError, GitRepository, TagPushError, authenticated_url
from releaser.core.github import (
    GITHUB_API_BASE,
    GITHUB_UPLOADS_BASE,
    GitHubError,
    ReleasesClient,
)
from releaser.core.intent import resolve_intent
from releaser.core.manifest import AssetManifest, ManifestError
from releaser.core.output import console
from releaser.models.intent import DAILY_TAG_PREFIX, ReleaseIntent
from releaser.models.release import RemoteRelease


@dataclass
class SyncReport:
    """Outcome of an asset sync. Failures are (filename, reason) pairs."""

    deleted: list[str] = field(default_factory=list)
    uploaded: list[str] = field(default_factory=list)
    failures: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def pick_release(releases: list[RemoteRelease], name: str) -> RemoteRelease | None:
    """Find the release with the given name.

    When several releases share the name, the most recently created wins;
    releases without a creation date rank last.
    """
    matches = [r for r in releases if r.name == name]
    if not matches:
        return None
    if len(matches) > 1:
        ids = ", ".join(str(r.id) for r in matches)
        console.print(
            f"[yellow]Warning:[/yellow] {len(matches)} releases named {escape(repr(name))} ({ids}); "
            "using the most recent"
        )
    return max(matches, key=lambda r: (bool(r.created_at), r.created_at))


def resolve_release(client: ReleasesClient, intent: ReleaseIntent) -> int | None:
    """Find or create the release for intent. Returns its id, or None.

    An existing release only gets its tag moved; name, draft and prerelease
    are set at creation and left alone afterwards. API failures are reported
    and swallowed so a flaky API never fails the build.
    """
    try:
        release = pick_release(client.list_releases(), intent.release_name)
    except GitHubError as e:
        console.print(f"[red]Error:[/red] Could not list releases: {escape(str(e))}")
        return None

    if release is None:
        console.print(f"Creating release {escape(intent.release_name)} with tag {escape(intent.tag_name)}")
        try:
            created = client.create_release(intent)
        except GitHubError as e:
            console.print(f"[red]Error:[/red] Could not create release: {escape(str(e))}")
            return None
        return created.id

    console.print(f"Updating release {escape(intent.release_name)} with tag {escape(intent.tag_name)}")
    try:
        client.update_release_tag(release.id, intent.tag_name)
    except GitHubError as e:
        # The release exists, so uploads can still go ahead
        console.print(f"[yellow]Warning:[/yellow] Could not update tag: {escape(str(e))}")
    return release.id


def delete_existing_asset(client: ReleasesClient, release_id: int, filename: str) -> bool:
    """Delete the release asset named filename, if present.

    Returns True if an asset was deleted.
    """
    existing = next(
        (a for a in client.list_assets(release_id) if a.name == filename), None
    )
    if existing is None:
        return False
    console.print(f"Deleting {escape(filename)}")
    client.delete_asset(existing.id)
    return True


def sync_assets(
    client: ReleasesClient,
    release_id: int,
    manifest: AssetManifest,
    build_dir: Path,
) -> SyncReport:
    """Replace the release's assets with the files listed in the manifest.

    All old assets are removed first, then the new ones are uploaded
    category by category. Each delete and upload stands on its own: a
    failure is recorded and the loop moves on.
    """
    report = SyncReport()

    for filename in manifest.filenames():
        try:
            if delete_existing_asset(client, release_id, filename):
                report.deleted.append(filename)
        except GitHubError as e:
            console.print(f"  [red]Delete failed:[/red] {escape(filename)}: {escape(str(e))}")
            report.failures.append((filename, f"delete: {e}"))

    for asset in manifest.assets(build_dir):
        console.print(f"Posting {escape(asset.filename)}")
        try:
            data = asset.local_path.read_bytes()
        except OSError as e:
            console.print(f"  [red]Missing artifact:[/red] {escape(str(asset.local_path))} ({e.strerror})")
            report.failures.append((asset.filename, f"read: {e.strerror}"))
            continue

        try:
            uploaded = client.upload_asset(
                release_id, asset.filename, asset.content_type, data
            )
        except GitHubError as e:
            console.print(f"  [red]Upload failed:[/red] {escape(asset.filename)}: {escape(str(e))}")
            report.failures.append((asset.filename, f"upload: {e}"))
            continue

        report.uploaded.append(asset.filename)
        if uploaded.download_url:
            console.print(f"  [dim]{escape(uploaded.download_url)}[/dim]")

    return report


def prune_daily_tags(git: GitRepository, current_tag: str, remote_url: str) -> list[str]:
    """Delete every daily tag except current_tag, locally and on the remote.

    Stops at the first remote deletion that fails.

    Returns:
        The tags that were deleted

    Raises:
        TagPushError: if pushing a deletion fails
    """
    deleted = []
    for tag in git.list_tags(DAILY_TAG_PREFIX):
        if tag == current_tag:
            continue
        console.print(f"Deleting tag {escape(tag)}")
        git.delete_local_tag(tag)
        returncode = git.push_tag_deletion(remote_url, tag)
        if returncode != 0:
            raise TagPushError(tag, returncode)
        deleted.append(tag)
    return deleted


def run_publish(
    config: PublisherConfig,
    manifest: AssetManifest,
    client: ReleasesClient,
    git: GitRepository,
) -> int:
    """Run the whole workflow. Returns the process exit code."""
    intent = resolve_intent(config.tag, config.scheduled)
    if intent.is_noop:
        reason = "scheduled build" if config.scheduled else "build is not associated with a tag"
        console.print(f"[dim]Nothing to publish ({reason})[/dim]")
        return 0

    release_id = resolve_release(client, intent)
    if release_id is None:
        console.print(
            f"[red]Error:[/red] Release {escape(intent.release_name)} was not found. "
            "No artifacts were uploaded to GitHub releases."
        )
        return 1 if config.strict else 0

    console.print(f"Uploading release assets for {escape(intent.release_name)}")
    report = sync_assets(client, release_id, manifest, config.build_dir)
    if report.ok:
        console.print(
            f"[green]✓[/green] Uploaded {len(report.uploaded)} asset(s) to "
            f"[bold]{escape(intent.release_name)}[/bold]"
        )
    else:
        console.print(
            f"[yellow]Uploaded {len(report.uploaded)} of {len(manifest)} asset(s) "
            f"to {escape(intent.release_name)}; {len(report.failures)} failure(s)[/yellow]"
        )

    if not intent.is_daily:
        return 0

    try:
        remote_url = authenticated_url(git.remote_url(), config.token)
        deleted = prune_daily_tags(git, intent.tag_name, remote_url)
    except GitError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    if deleted:
        console.print(f"[green]✓[/green] Pruned {len(deleted)} daily tag(s)")
    return 0


@click.command()
@click.option("--token", envvar="GITHUB_API_KEY", help="GitHub personal access token")
@click.option("--repo", "repo_spec", envvar="TRAVIS_REPO_SLUG", help="Repository (owner/repo)")
@click.option("--tag", envvar="TRAVIS_TAG", default="", help="Tag that triggered the build")
@click.option("--event-type", envvar="TRAVIS_EVENT_TYPE", default="", help="Build event type (cron builds are skipped)")
@click.option(
    "--build-dir",
    envvar="TRAVIS_BUILD_DIR",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Working tree holding the build outputs",
)
@click.option(
    "--manifest",
    "manifest_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML artifact manifest (defaults to the built-in one)",
)
@click.option("--api-url", default=GITHUB_API_BASE, show_default=True, help="GitHub API base URL")
@click.option("--uploads-url", default=GITHUB_UPLOADS_BASE, show_default=True, help="GitHub uploads base URL")
@click.option("--timeout", default=DEFAULT_TIMEOUT, show_default=True, type=float, help="HTTP timeout in seconds")
@click.option("--strict", is_flag=True, help="Exit 1 if the release could not be created or found")
def publish(
    token: str | None,
    repo_spec: str | None,
    tag: str,
    event_type: str,
    build_dir: Path,
    manifest_path: Path | None,
    api_url: str,
    uploads_url: str,
    timeout: float,
    strict: bool,
):
    """Create or update the GitHub release for a tagged build.

    Daily tags (daily/YYYYMMDD) publish to the "Daily Build" prerelease and
    prune older daily tags. Other tags prepare a draft release named after
    the tag. Untagged and cron builds do nothing.
    """
    console.add_secret(token)

    try:
        config = PublisherConfig.create(
            token=token,
            repo_spec=repo_spec,
            tag=tag,
            event_type=event_type,
            build_dir=build_dir,
            api_url=api_url,
            uploads_url=uploads_url,
            timeout=timeout,
            strict=strict,
        )
        manifest = AssetManifest.load(manifest_path) if manifest_path else AssetManifest()
    except (ConfigError, ManifestError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    git = GitRepository(config.build_dir)
    with ReleasesClient.from_config(config) as client:
        raise SystemExit(run_publish(config, manifest, client, git))
