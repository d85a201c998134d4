"""Data models for releaser."""

from releaser.models.asset import Asset, AssetCategory
from releaser.models.intent import IntentKind, ReleaseIntent
from releaser.models.release import RemoteAsset, RemoteRelease

__all__ = [
    "Asset",
    "AssetCategory",
    "IntentKind",
    "ReleaseIntent",
    "RemoteAsset",
    "RemoteRelease",
]
