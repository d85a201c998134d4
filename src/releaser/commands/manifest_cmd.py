"""Manifest command implementation."""

from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from releaser.core.manifest import AssetManifest, ManifestError
from releaser.core.output import console


@click.command("manifest")
@click.option(
    "--manifest",
    "manifest_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML artifact manifest (defaults to the built-in one)",
)
@click.option(
    "--build-dir",
    envvar="TRAVIS_BUILD_DIR",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Working tree holding the build outputs",
)
@click.option("--write", "write_path", type=click.Path(dir_okay=False, path_type=Path), help="Save the manifest as YAML")
def show_manifest(manifest_path: Path | None, build_dir: Path, write_path: Path | None):
    """Show the release artifacts and whether they have been built."""
    try:
        manifest = AssetManifest.load(manifest_path) if manifest_path else AssetManifest()
    except ManifestError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    if write_path:
        manifest.save(write_path)
        console.print(f"[green]✓[/green] Wrote manifest to {escape(str(write_path))}")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Category", no_wrap=True)
    table.add_column("File", no_wrap=True)
    table.add_column("Content type")
    table.add_column("Built", no_wrap=True)

    missing = 0
    for asset in manifest.assets(build_dir):
        built = asset.local_path.is_file()
        if not built:
            missing += 1
        table.add_row(
            escape(asset.category),
            escape(asset.filename),
            escape(asset.content_type),
            "[green]✓[/green]" if built else "[red]missing[/red]",
        )

    console.print(table)
    if missing:
        console.print(f"\n[yellow]{missing} of {len(manifest)} artifact(s) missing in {escape(str(build_dir))}[/yellow]")
