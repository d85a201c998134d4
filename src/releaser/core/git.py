"""Git operations on the local working tree."""

import subprocess
from pathlib import Path


class GitError(Exception):
    """A git command failed."""

    def __init__(self, message: str, returncode: int = 1):
        super().__init__(message)
        self.returncode = returncode


class TagPushError(GitError):
    """Pushing a tag deletion to the remote failed."""

    def __init__(self, tag: str, returncode: int):
        super().__init__(f"git push failed. Returned {returncode}", returncode)
        self.tag = tag


def authenticated_url(url: str, token: str) -> str:
    """Embed the token in a remote URL unless it already has credentials.

    https://github.com/owner/repo.git -> https://<token>@github.com/owner/repo.git
    """
    if "@" in url or "://" not in url:
        return url
    return url.replace("://", f"://{token}@", 1)


class GitRepository:
    """A local git working tree.

    Output is always captured, never passed through to the terminal, since
    commands that talk to an authenticated remote may echo its URL.
    """

    def __init__(self, path: Path | str = "."):
        self.path = Path(path)

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        # A missing git binary or working tree surfaces as OSError
        try:
            return subprocess.run(
                ["git", *args],
                cwd=self.path,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise GitError(f"git {args[0]} could not run in {self.path}: {e.strerror}") from e

    def _check(self, *args: str) -> str:
        result = self._run(*args)
        if result.returncode != 0:
            raise GitError(
                f"git {args[0]} failed: {result.stderr.strip()}", result.returncode
            )
        return result.stdout

    def remote_url(self, remote: str = "origin") -> str:
        """Get the URL of a remote."""
        return self._check("config", "--get", f"remote.{remote}.url").strip()

    def list_tags(self, prefix: str = "") -> list[str]:
        """List local tags starting with prefix, sorted by name."""
        output = self._check("tag", "--list", f"{prefix}*")
        return sorted(line.strip() for line in output.splitlines() if line.strip())

    def delete_local_tag(self, name: str) -> None:
        """Delete a local tag."""
        self._check("tag", "--delete", name)

    def push_tag_deletion(self, remote_url: str, name: str) -> int:
        """Delete a tag on the remote. Returns the git exit status."""
        result = self._run("push", "--quiet", remote_url, f":refs/tags/{name}")
        return result.returncode
