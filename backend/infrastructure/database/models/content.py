"""
Generated content database model.
"""

from typing import Optional
from uuid import uuid4

from sqlalchemy import ForeignKey, Index, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class ContentItemModel(Base, TimestampMixin):
    """A post, script or video produced for an account."""

    __tablename__ = "content_items"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Owner
    account_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    platform: Mapped[str] = mapped_column(String(50), default="General", nullable=False)
    content_type: Mapped[str] = mapped_column(String(20), default="text", nullable=False)
    mode: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False)
    extra: Mapped[Optional[dict]] = mapped_column("metadata", JSON, nullable=True)

    __table_args__ = (
        Index("ix_content_items_account_created", "account_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<ContentItemModel(id={self.id}, platform={self.platform}, type={self.content_type})>"
