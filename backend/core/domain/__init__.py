# Domain Entities
# Pure business objects with no external dependencies
from .account import Account, SubscriptionStatus, UsageRecord
from .content import ContentItem, ContentMode, ContentStatus, ContentType
from .subscription import BillingEvent, BillingEventType

__all__ = [
    "Account",
    "SubscriptionStatus",
    "UsageRecord",
    "ContentItem",
    "ContentMode",
    "ContentStatus",
    "ContentType",
    "BillingEvent",
    "BillingEventType",
]
