"""Artifact manifest: which build outputs get attached to a release."""

from pathlib import Path
import yaml

from releaser.models.asset import Asset, AssetCategory


MANIFEST_VERSION = 1

APK_CONTENT_TYPE = "application/vnd.android.package-archive"
ZIP_CONTENT_TYPE = "application/zip"


class ManifestError(Exception):
    """The manifest file is missing or malformed."""

    pass


def default_categories() -> list[AssetCategory]:
    """The WorldWind Android build outputs, in upload order."""
    return [
        AssetCategory(
            name="libraries",
            directory="worldwind/build/outputs/aar",
            content_type=APK_CONTENT_TYPE,
            filenames=["worldwind-debug.aar", "worldwind-release.aar"],
        ),
        AssetCategory(
            name="examples",
            directory="worldwind-examples/build/outputs/apk",
            content_type=APK_CONTENT_TYPE,
            filenames=["worldwind-examples-debug.apk", "worldwind-examples-release.apk"],
        ),
        AssetCategory(
            name="tutorials",
            directory="worldwind-tutorials/build/outputs/apk",
            content_type=APK_CONTENT_TYPE,
            filenames=["worldwind-tutorials-debug.apk", "worldwind-tutorials-release.apk"],
        ),
        AssetCategory(
            name="documentation",
            directory="worldwind/build/outputs/doc",
            content_type=ZIP_CONTENT_TYPE,
            filenames=["worldwind-javadoc.zip"],
        ),
    ]


class AssetManifest:
    """An ordered set of asset categories."""

    def __init__(self, categories: list[AssetCategory] | None = None):
        self.categories = categories if categories is not None else default_categories()

    @classmethod
    def load(cls, path: Path) -> "AssetManifest":
        """Load a manifest from a YAML file."""
        if not path.exists():
            raise ManifestError(f"Manifest not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ManifestError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ManifestError(f"{path}: expected a mapping at the top level")

        version = data.get("version", MANIFEST_VERSION)
        if version != MANIFEST_VERSION:
            raise ManifestError(f"{path}: unsupported manifest version {version}")

        categories = []
        for entry in data.get("categories") or []:
            try:
                categories.append(AssetCategory.from_dict(entry))
            except (AttributeError, KeyError, TypeError) as e:
                raise ManifestError(f"{path}: invalid category {entry!r}: {e}") from e

        if not categories:
            raise ManifestError(f"{path}: no categories defined")

        manifest = cls(categories)
        duplicates = manifest.duplicate_filenames()
        if duplicates:
            raise ManifestError(f"{path}: duplicate files {', '.join(duplicates)}")
        return manifest

    def save(self, path: Path) -> None:
        """Write the manifest as YAML."""
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "version": MANIFEST_VERSION,
            "categories": [c.to_dict() for c in self.categories],
        }
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def filenames(self) -> list[str]:
        """All filenames across categories, in upload order."""
        return [name for c in self.categories for name in c.filenames]

    def duplicate_filenames(self) -> list[str]:
        seen: set[str] = set()
        duplicates = []
        for name in self.filenames():
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)
        return duplicates

    def assets(self, build_dir: Path) -> list[Asset]:
        """Resolve every file against the build directory."""
        return [
            Asset(
                filename=name,
                content_type=category.content_type,
                local_path=build_dir / category.directory / name,
                category=category.name,
            )
            for category in self.categories
            for name in category.filenames
        ]

    def __len__(self) -> int:
        return len(self.filenames())
