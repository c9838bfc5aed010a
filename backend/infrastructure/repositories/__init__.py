"""SQLAlchemy implementations of the repository interfaces."""

from .accounts import SqlAlchemyAccountRepository
from .contents import SqlAlchemyContentRepository
from .unit_of_work import SqlAlchemyUnitOfWork
from .webhook_events import SqlAlchemyWebhookEventRepository

__all__ = [
    "SqlAlchemyAccountRepository",
    "SqlAlchemyContentRepository",
    "SqlAlchemyWebhookEventRepository",
    "SqlAlchemyUnitOfWork",
]
