"""
SQLAlchemy database models.
"""

from .account import AccountModel
from .base import Base, TimestampMixin
from .content import ContentItemModel
from .webhook_event import ProcessedWebhookEvent

__all__ = [
    "Base",
    "TimestampMixin",
    "AccountModel",
    "ContentItemModel",
    "ProcessedWebhookEvent",
]
