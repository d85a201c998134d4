"""CLI entry point for releaser."""

import click

from releaser import __version__
from releaser.commands import manifest_cmd, prune, publish


@click.group()
@click.version_option(version=__version__, prog_name="releaser")
def main():
    """Releaser - publish CI build artifacts to GitHub releases.

    Run from a CI job after a tagged build. Settings are read from the
    options or from the Travis environment (GITHUB_API_KEY, TRAVIS_TAG,
    TRAVIS_REPO_SLUG, TRAVIS_EVENT_TYPE, TRAVIS_BUILD_DIR).

    Examples:

        releaser publish --repo nasaworldwind/worldwindandroid --tag daily/20200103

        releaser prune-tags --tag daily/20200103

        releaser manifest --build-dir .
    """
    pass


# Register commands
main.add_command(publish.publish)
main.add_command(prune.prune_tags)
main.add_command(manifest_cmd.show_manifest)


if __name__ == "__main__":
    main()
