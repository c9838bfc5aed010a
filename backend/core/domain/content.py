"""Content domain entities."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from uuid import uuid4


class ContentMode(StrEnum):
    """Generation modes accepted by the text endpoints."""

    CHAT = "chat"
    VIDEO = "video"
    SOCIAL = "social"
    STREAM = "stream"
    CLIP = "clip"


class ContentType(StrEnum):
    """What kind of artifact a content item holds."""

    TEXT = "text"
    SCRIPT = "script"
    VIDEO = "video"


class ContentStatus(StrEnum):
    """Content item status."""

    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"
    ARCHIVED = "archived"


# Platform tag a mode's output is written for, unless the caller names one.
MODE_PLATFORMS = {
    ContentMode.CHAT: "General",
    ContentMode.VIDEO: "YouTube",
    ContentMode.SOCIAL: "Instagram",
    ContentMode.STREAM: "Twitch",
    ContentMode.CLIP: "TikTok",
}

PLATFORMS = ("TikTok", "Instagram", "YouTube", "Twitter", "LinkedIn", "Facebook", "Twitch", "General")


@dataclass
class ContentItem:
    """A generated post, script or video owned by an account."""

    account_id: str
    body: str
    title: str = ""
    platform: str = "General"
    content_type: ContentType = ContentType.TEXT
    mode: str | None = None
    status: ContentStatus = ContentStatus.DRAFT
    metadata: dict = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self):
        if isinstance(self.content_type, str):
            self.content_type = ContentType(self.content_type)
        if isinstance(self.status, str):
            self.status = ContentStatus(self.status)
