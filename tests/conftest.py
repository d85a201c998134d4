from __future__ import annotations

from pathlib import Path

import pytest

from releaser.core.github import GitHubError
from releaser.core.manifest import AssetManifest
from releaser.models.asset import AssetCategory
from releaser.models.intent import ReleaseIntent
from releaser.models.release import RemoteAsset, RemoteRelease


class FakeReleasesClient:
    """In-memory stand-in for ReleasesClient that records every call."""

    def __init__(
        self,
        releases: list[RemoteRelease] | None = None,
        assets: list[RemoteAsset] | None = None,
    ):
        self.releases = list(releases or [])
        self.assets = list(assets or [])
        self.calls: list[tuple] = []
        self.fail: dict[str, set] = {}
        self._next_id = 1000

    def fail_on(self, method: str, key=None) -> None:
        self.fail.setdefault(method, set()).add(key)

    def _maybe_fail(self, method: str, key=None) -> None:
        keys = self.fail.get(method, set())
        if None in keys or key in keys:
            raise GitHubError(f"{method} failed", 500)

    def list_releases(self) -> list[RemoteRelease]:
        self.calls.append(("list_releases",))
        self._maybe_fail("list_releases")
        return list(self.releases)

    def create_release(self, intent: ReleaseIntent) -> RemoteRelease:
        self.calls.append(("create_release", intent))
        self._maybe_fail("create_release")
        self._next_id += 1
        release = RemoteRelease(
            id=self._next_id,
            name=intent.release_name,
            tag_name=intent.tag_name,
            draft=intent.draft,
            prerelease=intent.prerelease,
        )
        self.releases.append(release)
        return release

    def update_release_tag(self, release_id: int, tag: str) -> RemoteRelease:
        self.calls.append(("update_release_tag", release_id, tag))
        self._maybe_fail("update_release_tag", release_id)
        release = next(r for r in self.releases if r.id == release_id)
        release.tag_name = tag
        return release

    def list_assets(self, release_id: int) -> list[RemoteAsset]:
        self.calls.append(("list_assets", release_id))
        self._maybe_fail("list_assets")
        return list(self.assets)

    def delete_asset(self, asset_id: int) -> None:
        self.calls.append(("delete_asset", asset_id))
        self._maybe_fail("delete_asset", asset_id)
        self.assets = [a for a in self.assets if a.id != asset_id]

    def upload_asset(self, release_id: int, filename: str, content_type: str, data: bytes) -> RemoteAsset:
        self.calls.append(("upload_asset", release_id, filename, content_type, data))
        self._maybe_fail("upload_asset", filename)
        self._next_id += 1
        asset = RemoteAsset(
            id=self._next_id,
            name=filename,
            content_type=content_type,
            download_url=f"https://github.com/o/r/releases/download/t/{filename}",
        )
        self.assets.append(asset)
        return asset

    def called(self, method: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == method]


class FakeGit:
    """In-memory stand-in for GitRepository."""

    def __init__(self, tags: list[str], url: str = "https://github.com/o/r.git"):
        self.tags = list(tags)
        self.url = url
        self.deleted_local: list[str] = []
        self.pushed: list[tuple[str, str]] = []
        self.push_failures: dict[str, int] = {}

    def remote_url(self, remote: str = "origin") -> str:
        return self.url

    def list_tags(self, prefix: str = "") -> list[str]:
        return sorted(t for t in self.tags if t.startswith(prefix))

    def delete_local_tag(self, name: str) -> None:
        self.tags.remove(name)
        self.deleted_local.append(name)

    def push_tag_deletion(self, remote_url: str, name: str) -> int:
        self.pushed.append((remote_url, name))
        return self.push_failures.get(name, 0)


@pytest.fixture
def small_manifest() -> AssetManifest:
    return AssetManifest(
        [
            AssetCategory(
                name="libraries",
                directory="lib",
                content_type="application/vnd.android.package-archive",
                filenames=["core-debug.aar", "core-release.aar"],
            ),
            AssetCategory(
                name="documentation",
                directory="doc",
                content_type="application/zip",
                filenames=["core-javadoc.zip"],
            ),
        ]
    )


@pytest.fixture
def build_dir(tmp_path: Path, small_manifest: AssetManifest) -> Path:
    for asset in small_manifest.assets(tmp_path):
        asset.local_path.parent.mkdir(parents=True, exist_ok=True)
        asset.local_path.write_bytes(f"contents of {asset.filename}".encode())
    return tmp_path
