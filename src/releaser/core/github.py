"""GitHub API client for managing releases and their assets."""

import re
import httpx

from releaser.models.intent import ReleaseIntent
from releaser.models.release import RemoteAsset, RemoteRelease


GITHUB_API_BASE = "https://api.github.com"
GITHUB_UPLOADS_BASE = "https://uploads.github.com"


class GitHubError(Exception):
    """Error from GitHub API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def parse_repo_spec(spec: str) -> tuple[str, str]:
    """Parse a repo spec into (owner, repo).

    Accepts:
    - owner/repo
    - https://github.com/owner/repo
    - github.com/owner/repo
    """
    # Handle full URLs
    url_pattern = r"(?:https?://)?github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$"
    match = re.match(url_pattern, spec)
    if match:
        return match.group(1), match.group(2)

    # Handle owner/repo format
    if "/" in spec:
        parts = spec.split("/")
        if len(parts) == 2 and all(parts):
            return parts[0], parts[1]

    raise ValueError(f"Invalid repo spec: {spec}. Use 'owner/repo' or GitHub URL.")


class ReleasesClient:
    """Client for the releases endpoints of a single repository.

    Every request carries the access token in the Authorization header.
    The client itself never prints anything; callers report failures from
    the GitHubError it raises, whose messages hold no header values.
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        api_url: str = GITHUB_API_BASE,
        uploads_url: str = GITHUB_UPLOADS_BASE,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.owner = owner
        self.repo = repo
        self.uploads_url = uploads_url.rstrip("/")
        self.client = httpx.Client(
            base_url=api_url,
            headers={
                "Authorization": f"token {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config, transport: httpx.BaseTransport | None = None) -> "ReleasesClient":
        """Create a client from a PublisherConfig."""
        return cls(
            token=config.token,
            owner=config.owner,
            repo=config.repo,
            api_url=config.api_url,
            uploads_url=config.uploads_url,
            timeout=config.timeout,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.client.close()

    @property
    def releases_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}/releases"

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send a request, turning transport and HTTP errors into GitHubError."""
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise GitHubError(f"{method} {url} failed: {e.__class__.__name__}") from e

        if response.status_code == 401:
            raise GitHubError("GitHub rejected the access token", 401)
        if response.status_code == 404:
            raise GitHubError(f"Not found: {method} {url}", 404)
        if response.status_code == 403:
            raise GitHubError("GitHub API rate limit exceeded or access denied", 403)
        if response.is_error:
            raise GitHubError(
                f"{method} {url} returned HTTP {response.status_code}: {_error_detail(response)}",
                response.status_code,
            )
        return response

    def _paginate(self, url: str, per_page: int) -> list[dict]:
        """GET a list endpoint, following Link: rel="next" until the last page."""
        items = []
        next_url: str | None = url
        params: dict | None = {"per_page": per_page}
        while next_url:
            response = self._request("GET", next_url, params=params)
            items.extend(response.json())
            next_url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            params = None
        return items

    def list_releases(self, per_page: int = 100) -> list[RemoteRelease]:
        """Get all releases, drafts included, following pagination.

        Draft releases are only listed for tokens with push access.
        """
        return [
            RemoteRelease.from_api_response(d)
            for d in self._paginate(self.releases_path, per_page)
        ]

    def create_release(self, intent: ReleaseIntent) -> RemoteRelease:
        """Create a release for an existing tag."""
        response = self._request(
            "POST",
            self.releases_path,
            json={
                "tag_name": intent.tag_name,
                "name": intent.release_name,
                "draft": intent.draft,
                "prerelease": intent.prerelease,
            },
        )
        return RemoteRelease.from_api_response(response.json())

    def update_release_tag(self, release_id: int, tag: str) -> RemoteRelease:
        """Point an existing release at another tag, leaving everything else."""
        response = self._request(
            "PATCH",
            f"{self.releases_path}/{release_id}",
            json={"tag_name": tag},
        )
        return RemoteRelease.from_api_response(response.json())

    def list_assets(self, release_id: int, per_page: int = 100) -> list[RemoteAsset]:
        """Get the assets attached to a release, following pagination."""
        return [
            RemoteAsset.from_api_response(d)
            for d in self._paginate(f"{self.releases_path}/{release_id}/assets", per_page)
        ]

    def delete_asset(self, asset_id: int) -> None:
        """Delete a release asset."""
        self._request("DELETE", f"{self.releases_path}/assets/{asset_id}")

    def upload_asset(
        self,
        release_id: int,
        filename: str,
        content_type: str,
        data: bytes,
    ) -> RemoteAsset:
        """Upload binary data as a new release asset named filename."""
        response = self._request(
            "POST",
            f"{self.uploads_url}/repos/{self.owner}/{self.repo}/releases/{release_id}/assets",
            params={"name": filename},
            headers={"Content-Type": content_type},
            content=data,
        )
        return RemoteAsset.from_api_response(response.json())


def _error_detail(response: httpx.Response) -> str:
    """Pull the message out of a GitHub error payload."""
    try:
        payload = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(payload, dict):
        message = payload.get("message", response.reason_phrase)
        errors = payload.get("errors") or []
        codes = [e.get("code") for e in errors if isinstance(e, dict) and e.get("code")]
        if codes:
            return f"{message} ({', '.join(codes)})"
        return message
    return response.reason_phrase
