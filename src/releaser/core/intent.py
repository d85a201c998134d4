"""Derive the release intent from the build trigger."""

from releaser.models.intent import (
    DAILY_RELEASE_NAME,
    DAILY_TAG_PREFIX,
    IntentKind,
    ReleaseIntent,
)


def is_daily_tag(tag: str | None) -> bool:
    """Check if a tag belongs to the scheduled daily builds."""
    return bool(tag) and tag.startswith(DAILY_TAG_PREFIX)


def resolve_intent(tag: str | None, scheduled: bool = False) -> ReleaseIntent:
    """Map a trigger tag to the release it should produce.

    Daily tags (daily/YYYYMMDD) all publish to the same "Daily Build"
    prerelease. Any other tag prepares a draft release named after the tag.
    Builds without a tag, and cron builds, publish nothing.
    """
    if scheduled or not tag:
        return ReleaseIntent(kind=IntentKind.NO_OP, tag_name=tag or "")

    if is_daily_tag(tag):
        return ReleaseIntent(
            kind=IntentKind.DAILY_BUILD,
            tag_name=tag,
            release_name=DAILY_RELEASE_NAME,
            draft=False,
            prerelease=True,
        )

    return ReleaseIntent(
        kind=IntentKind.MANUAL_DRAFT,
        tag_name=tag,
        release_name=tag,
        draft=True,
        prerelease=False,
    )
