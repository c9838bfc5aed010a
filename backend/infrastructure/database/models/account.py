"""
Account database model.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class AccountModel(Base, TimestampMixin):
    """Registered account with its subscription state and usage counters."""

    __tablename__ = "accounts"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Basic info
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    company: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Authentication
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Subscription
    plan: Mapped[str] = mapped_column(String(50), default="free", nullable=False)
    subscription_status: Mapped[str] = mapped_column(
        String(50),
        default="none",
        nullable=False,
    )
    billing_cycle: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    stripe_customer_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        index=True,
    )
    stripe_subscription_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        index=True,
    )
    last_billing_event_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Usage
    generations_used: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    posts_created: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    __table_args__ = (
        CheckConstraint("generations_used >= 0", name="ck_accounts_generations_used_nonneg"),
        CheckConstraint("posts_created >= 0", name="ck_accounts_posts_created_nonneg"),
        Index("ix_accounts_plan_status", "plan", "subscription_status"),
    )

    def __repr__(self) -> str:
        return f"<AccountModel(id={self.id}, email={self.email}, plan={self.plan})>"
