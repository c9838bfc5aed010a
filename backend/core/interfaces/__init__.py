# Interfaces (Abstract Contracts)
# Adapters implement these interfaces
from .repositories import (
    AccountRepository,
    ContentRepository,
    UnitOfWork,
    WebhookEventRepository,
)
from .services import (
    CheckoutSession,
    NotificationService,
    PaymentService,
    VideoResult,
    VideoService,
)

__all__ = [
    "AccountRepository",
    "ContentRepository",
    "WebhookEventRepository",
    "UnitOfWork",
    "NotificationService",
    "PaymentService",
    "VideoService",
    "VideoResult",
    "CheckoutSession",
]
