"""Repository interfaces for data access."""

from abc import ABC, abstractmethod
from datetime import datetime

from ..domain.account import Account
from ..domain.content import ContentItem


class AccountRepository(ABC):
    """Abstract repository for Account entities."""

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account."""
        ...

    @abstractmethod
    async def get_by_id(self, account_id: str, *, for_update: bool = False) -> Account | None:
        """
        Get account by ID.

        With ``for_update`` the row stays locked until the transaction ends.
        """
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Account | None:
        """Get account by (lower-cased) email."""
        ...

    @abstractmethod
    async def get_by_stripe_customer_id(self, customer_id: str, *, for_update: bool = False) -> Account | None:
        ...

    @abstractmethod
    async def get_by_stripe_subscription_id(
        self, subscription_id: str, *, for_update: bool = False
    ) -> Account | None:
        ...

    @abstractmethod
    async def update_profile(self, account_id: str, changes: dict[str, str | None]) -> Account | None:
        """Write first_name, last_name and company only. Other keys are ignored."""
        ...

    @abstractmethod
    async def update_billing(self, account: Account) -> Account:
        """Persist plan and subscription fields. Profile and usage are NOT written here."""
        ...

    @abstractmethod
    async def try_consume_generation(self, account_id: str, quota: int | None) -> bool:
        """
        Atomically increment usage counters if the account is under quota.

        Must be a single compare-and-increment at the storage layer so two
        concurrent callers can never both observe room under the quota.
        ``quota`` of None means unbounded. Returns False when nothing was
        incremented.
        """
        ...

    @abstractmethod
    async def release_generation(self, account_id: str) -> None:
        """Undo one consume_generation, never dropping counters below zero."""
        ...


class ContentRepository(ABC):
    """Abstract repository for ContentItem entities."""

    @abstractmethod
    async def create(self, item: ContentItem) -> ContentItem:
        ...

    @abstractmethod
    async def get_for_account(self, item_id: str, account_id: str) -> ContentItem | None:
        """Get an item only if it belongs to the account."""
        ...

    @abstractmethod
    async def list_for_account(self, account_id: str, skip: int = 0, limit: int = 100) -> list[ContentItem]:
        """Items for an account, newest first."""
        ...

    @abstractmethod
    async def delete_for_account(self, item_id: str, account_id: str) -> bool:
        ...

    @abstractmethod
    async def count_by_platform(self, account_id: str) -> dict[str, int]:
        ...

    @abstractmethod
    async def count_by_type(self, account_id: str) -> dict[str, int]:
        ...


class WebhookEventRepository(ABC):
    """Durable record of billing events that have already been applied."""

    @abstractmethod
    async def exists(self, event_id: str) -> bool:
        ...

    @abstractmethod
    async def record(self, event_id: str, event_type: str, processed_at: datetime | None = None) -> None:
        """Record an event as applied. Committed together with the account changes it caused."""
        ...


class UnitOfWork(ABC):
    """Groups the repositories that share one transaction."""

    accounts: AccountRepository
    contents: ContentRepository
    webhook_events: WebhookEventRepository

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...
