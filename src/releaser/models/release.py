"""GitHub release data models."""

from dataclasses import dataclass


@dataclass
class RemoteAsset:
    """Represents an asset attached to a GitHub release."""

    id: int
    name: str
    size: int = 0
    content_type: str = "application/octet-stream"
    download_url: str = ""

    @classmethod
    def from_api_response(cls, data: dict) -> "RemoteAsset":
        """Create RemoteAsset from GitHub API response."""
        return cls(
            id=data["id"],
            name=data["name"],
            size=data.get("size", 0),
            content_type=data.get("content_type") or "application/octet-stream",
            download_url=data.get("browser_download_url", ""),
        )


@dataclass
class RemoteRelease:
    """Represents a release record on GitHub."""

    id: int
    name: str
    tag_name: str
    draft: bool = False
    prerelease: bool = False
    created_at: str = ""
    upload_url: str = ""
    html_url: str = ""

    @classmethod
    def from_api_response(cls, data: dict) -> "RemoteRelease":
        """Create RemoteRelease from GitHub API response.

        Unlike the tag, the name of a release may be null on GitHub; it is
        kept empty here so that name lookups never match it by accident.
        """
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            tag_name=data.get("tag_name", ""),
            draft=data.get("draft", False),
            prerelease=data.get("prerelease", False),
            created_at=data.get("created_at") or "",
            upload_url=data.get("upload_url", ""),
            html_url=data.get("html_url", ""),
        )
