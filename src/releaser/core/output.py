"""Console output that never shows the access token."""

from typing import Any

from rich.console import Console


REDACTED = "***"


class SecretConsole(Console):
    """A rich Console that masks registered secrets in everything it prints.

    The token is registered once at the entry point. Every string passed to
    print() or log() goes through redact(), so commands can print remote
    URLs, git stderr or exception text without checking them first.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._secrets: set[str] = set()

    def add_secret(self, secret: str | None) -> None:
        """Register a value that must never be shown."""
        if secret:
            self._secrets.add(secret)

    def redact(self, text: str) -> str:
        """Replace every registered secret in text."""
        # Longest first so a secret containing another one is masked whole
        for secret in sorted(self._secrets, key=len, reverse=True):
            text = text.replace(secret, REDACTED)
        return text

    def _scrub(self, objects: tuple[Any, ...]) -> list[Any]:
        return [self.redact(o) if isinstance(o, str) else o for o in objects]

    def print(self, *objects: Any, **kwargs) -> None:
        if self._secrets:
            objects = tuple(self._scrub(objects))
        super().print(*objects, **kwargs)

    def log(self, *objects: Any, **kwargs) -> None:
        if self._secrets:
            objects = tuple(self._scrub(objects))
        kwargs["_stack_offset"] = kwargs.get("_stack_offset", 1) + 1
        super().log(*objects, **kwargs)


console = SecretConsole()
