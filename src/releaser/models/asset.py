"""Artifact manifest data models."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class AssetCategory:
    """A group of build outputs sharing a directory and content type."""

    name: str
    directory: str
    content_type: str
    filenames: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for YAML serialization."""
        return {
            "name": self.name,
            "directory": self.directory,
            "content_type": self.content_type,
            "files": list(self.filenames),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AssetCategory":
        """Create AssetCategory from dictionary.

        Raises:
            KeyError: if a required field is missing
            TypeError: if files is not a list of filenames
        """
        files = data.get("files", [])
        if not isinstance(files, list) or not all(isinstance(f, str) and f for f in files):
            raise TypeError(f"files must be a list of filenames, got {files!r}")
        return cls(
            name=data["name"],
            directory=data["directory"],
            content_type=data["content_type"],
            filenames=list(files),
        )


@dataclass(frozen=True)
class Asset:
    """A single build artifact to upload."""

    filename: str
    content_type: str
    local_path: Path
    category: str = ""
