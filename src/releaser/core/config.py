"""Run configuration for releaser."""

from dataclasses import dataclass
from pathlib import Path

from releaser.core.github import GITHUB_API_BASE, GITHUB_UPLOADS_BASE, parse_repo_spec


DEFAULT_TIMEOUT = 60.0
SCHEDULED_EVENT_TYPES = ("cron",)


class ConfigError(Exception):
    """Invalid or missing configuration."""

    pass


@dataclass(frozen=True)
class PublisherConfig:
    """Everything a publish run needs, read once at startup."""

    token: str
    owner: str
    repo: str
    tag: str = ""
    scheduled: bool = False
    build_dir: Path = Path(".")
    api_url: str = GITHUB_API_BASE
    uploads_url: str = GITHUB_UPLOADS_BASE
    timeout: float = DEFAULT_TIMEOUT
    strict: bool = False

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def create(
        cls,
        token: str | None,
        repo_spec: str | None,
        tag: str | None = None,
        event_type: str | None = None,
        build_dir: Path | str | None = None,
        **kwargs,
    ) -> "PublisherConfig":
        """Validate raw option values and build a config.

        Raises:
            ConfigError: if the credential is missing, or the repository is
                missing for a build that has something to publish
        """
        tag = (tag or "").strip()
        scheduled = (event_type or "").lower() in SCHEDULED_EVENT_TYPES

        if not token:
            raise ConfigError(
                "You must export the GITHUB_API_KEY containing the personal access token; "
                "GitHub was not updated."
            )
        owner, repo = "", ""
        if repo_spec:
            try:
                owner, repo = parse_repo_spec(repo_spec)
            except ValueError as e:
                raise ConfigError(str(e)) from e
        elif tag and not scheduled:
            # Untagged and cron builds publish nothing, so they need no repository
            raise ConfigError(
                "No repository given. Use --repo owner/repo or export TRAVIS_REPO_SLUG."
            )

        return cls(
            token=token,
            owner=owner,
            repo=repo,
            tag=tag,
            scheduled=scheduled,
            build_dir=Path(build_dir) if build_dir else Path("."),
            **kwargs,
        )
