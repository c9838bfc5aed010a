"""Account domain entity."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from uuid import uuid4

from core.plans import FREE_PLAN


class SubscriptionStatus(StrEnum):
    """Subscription lifecycle states."""

    NONE = "none"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"


@dataclass
class UsageRecord:
    """Per-account usage counters."""

    generations_used: int = 0
    posts_created: int = 0

    def __post_init__(self):
        self.generations_used = max(int(self.generations_used or 0), 0)
        self.posts_created = max(int(self.posts_created or 0), 0)

    def to_dict(self) -> dict:
        return {
            "generationsUsed": self.generations_used,
            "postsCreated": self.posts_created,
        }


@dataclass
class Account:
    """Account domain entity - core business object."""

    id: str = field(default_factory=lambda: str(uuid4()))
    email: str = ""
    password_hash: str = ""
    first_name: str = ""
    last_name: str = ""
    company: str | None = None

    # Subscription
    plan: str = FREE_PLAN
    subscription_status: SubscriptionStatus = SubscriptionStatus.NONE
    billing_cycle: str | None = None
    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None
    last_billing_event_at: datetime | None = None

    usage: UsageRecord = field(default_factory=UsageRecord)

    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self):
        if isinstance(self.subscription_status, str):
            self.subscription_status = SubscriptionStatus(self.subscription_status)
        if self.usage is None:
            self.usage = UsageRecord()

    @property
    def has_paid_subscription(self) -> bool:
        return self.subscription_status in (SubscriptionStatus.ACTIVE, SubscriptionStatus.PAST_DUE)
