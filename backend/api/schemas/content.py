"""
Content library schemas.
"""

from datetime import datetime
from typing import Any, Optional

from core.domain.content import ContentItem

from .common import CamelModel


class PostResponse(CamelModel):
    """A stored post, script or video."""

    id: str
    title: str
    content: str
    platform: str
    type: str
    mode: Optional[str] = None
    status: str
    metadata: dict[str, Any] = {}
    created_at: Optional[datetime] = None

    @classmethod
    def from_item(cls, item: ContentItem) -> "PostResponse":
        return cls(
            id=item.id,
            title=item.title,
            content=item.body,
            platform=item.platform,
            type=item.content_type.value,
            mode=item.mode,
            status=item.status.value,
            metadata=item.metadata or {},
            created_at=item.created_at,
        )


class PostListResponse(CamelModel):
    posts: list[PostResponse]
    total: int
    skip: int
    limit: int


class DeleteResponse(CamelModel):
    success: bool = True
    message: str
