"""Release intent model."""

from dataclasses import dataclass
from enum import Enum


DAILY_TAG_PREFIX = "daily"
DAILY_RELEASE_NAME = "Daily Build"


class IntentKind(Enum):
    """What a build trigger asks the publisher to do."""

    DAILY_BUILD = "daily"
    MANUAL_DRAFT = "draft"
    NO_OP = "noop"


@dataclass(frozen=True)
class ReleaseIntent:
    """The release a build should publish, derived once from its tag."""

    kind: IntentKind
    tag_name: str = ""
    release_name: str = ""
    draft: bool = False
    prerelease: bool = False

    @property
    def is_noop(self) -> bool:
        return self.kind is IntentKind.NO_OP

    @property
    def is_daily(self) -> bool:
        return self.kind is IntentKind.DAILY_BUILD
