"""
Pytest configuration and shared fixtures for backend tests.
"""

import os
import sys
from pathlib import Path

# Settings are read once at import time, so the test environment goes first
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-influencore-tests-0123456789"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_influencore"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test_influencore"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RESEND_API_KEY"] = ""
os.environ["REPLICATE_API_TOKEN"] = ""
os.environ["FREE_GENERATIONS"] = "2"
os.environ["UPGRADE_PROMPT_AFTER"] = "1"

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import copy
import hashlib
import hmac
import json
import time
from datetime import UTC, datetime
from typing import AsyncGenerator
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import after path is set
from adapters.ai.video_adapter import ReplicateVideoService
from api.deps import get_notifier, get_video_service
from core.domain.account import Account
from core.domain.content import ContentItem
from core.exceptions import DuplicateEventError
from core.interfaces.repositories import (
    AccountRepository,
    ContentRepository,
    UnitOfWork,
    WebhookEventRepository,
)
from core.interfaces.services import NotificationService
from core.security import PasswordHasher, TokenService
from infrastructure.config import get_settings
from infrastructure.database.connection import get_db
from infrastructure.database.models import AccountModel, Base

# Initialize security services
password_hasher = PasswordHasher()
settings = get_settings()
token_service = TokenService(secret_key=settings.jwt_secret_key)

TEST_PASSWORD = "testpassword123"

# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ============================================================================
# In-memory fakes for service-level unit tests
# ============================================================================


class RecordingNotifier(NotificationService):
    """Notification service that records instead of sending."""

    def __init__(self):
        self.sent: list[tuple[str, str, str | None]] = []

    def of_kind(self, kind: str) -> list[tuple[str, str, str | None]]:
        return [entry for entry in self.sent if entry[0] == kind]

    async def send_welcome_email(self, account: Account) -> bool:
        self.sent.append(("welcome", account.email, None))
        return True

    async def send_upgrade_notification(self, account: Account, plan_name: str) -> bool:
        self.sent.append(("upgrade", account.email, plan_name))
        return True

    async def send_usage_limit_notification(self, account: Account) -> bool:
        self.sent.append(("usage_limit", account.email, None))
        return True


class InMemoryAccountRepository(AccountRepository):
    def __init__(self):
        self.rows: dict[str, Account] = {}
        self.locked: list[str] = []

    def add(self, account: Account) -> Account:
        self.rows[account.id] = copy.deepcopy(account)
        return account

    def _find(self, predicate, for_update: bool = False) -> Account | None:
        for row in self.rows.values():
            if predicate(row):
                if for_update:
                    self.locked.append(row.id)
                return copy.deepcopy(row)
        return None

    async def create(self, account: Account) -> Account:
        account.email = account.email.lower()
        return self.add(account)

    async def get_by_id(self, account_id: str, *, for_update: bool = False) -> Account | None:
        return self._find(lambda row: row.id == account_id, for_update)

    async def get_by_email(self, email: str) -> Account | None:
        return self._find(lambda row: row.email == email.lower())

    async def get_by_stripe_customer_id(self, customer_id: str, *, for_update: bool = False) -> Account | None:
        return self._find(lambda row: row.stripe_customer_id == customer_id, for_update)

    async def get_by_stripe_subscription_id(
        self, subscription_id: str, *, for_update: bool = False
    ) -> Account | None:
        return self._find(lambda row: row.stripe_subscription_id == subscription_id, for_update)

    async def update_profile(self, account_id: str, changes: dict[str, str | None]) -> Account | None:
        stored = self.rows.get(account_id)
        if stored is None:
            return None
        for field in ("first_name", "last_name", "company"):
            if field in changes:
                setattr(stored, field, changes[field])
        return copy.deepcopy(stored)

    async def update_billing(self, account: Account) -> Account:
        stored = self.rows[account.id]
        for field in (
            "plan",
            "subscription_status",
            "billing_cycle",
            "stripe_customer_id",
            "stripe_subscription_id",
            "last_billing_event_at",
        ):
            setattr(stored, field, getattr(account, field))
        return copy.deepcopy(stored)

    async def try_consume_generation(self, account_id: str, quota: int | None) -> bool:
        # No await between check and increment, so this is atomic on the event loop
        usage = self.rows[account_id].usage
        if quota is not None and usage.generations_used >= quota:
            return False
        usage.generations_used += 1
        usage.posts_created += 1
        return True

    async def release_generation(self, account_id: str) -> None:
        usage = self.rows[account_id].usage
        usage.generations_used = max(usage.generations_used - 1, 0)
        usage.posts_created = max(usage.posts_created - 1, 0)


class InMemoryContentRepository(ContentRepository):
    def __init__(self):
        self.items: dict[str, ContentItem] = {}

    async def create(self, item: ContentItem) -> ContentItem:
        self.items[item.id] = item
        return item

    async def get_for_account(self, item_id: str, account_id: str) -> ContentItem | None:
        item = self.items.get(item_id)
        return item if item and item.account_id == account_id else None

    async def list_for_account(self, account_id: str, skip: int = 0, limit: int = 100) -> list[ContentItem]:
        owned = [item for item in self.items.values() if item.account_id == account_id]
        owned.sort(key=lambda item: item.created_at, reverse=True)
        return owned[skip: skip + limit]

    async def delete_for_account(self, item_id: str, account_id: str) -> bool:
        if await self.get_for_account(item_id, account_id) is None:
            return False
        del self.items[item_id]
        return True

    async def count_by_platform(self, account_id: str) -> dict[str, int]:
        counts: dict[str, int] = {}
        for item in self.items.values():
            if item.account_id == account_id:
                counts[item.platform] = counts.get(item.platform, 0) + 1
        return counts

    async def count_by_type(self, account_id: str) -> dict[str, int]:
        counts: dict[str, int] = {}
        for item in self.items.values():
            if item.account_id == account_id:
                key = item.content_type.value
                counts[key] = counts.get(key, 0) + 1
        return counts


class InMemoryWebhookEventRepository(WebhookEventRepository):
    def __init__(self):
        self.recorded: dict[str, str] = {}
        self.pending: dict[str, str] = {}

    async def exists(self, event_id: str) -> bool:
        return event_id in self.recorded

    async def record(self, event_id: str, event_type: str, processed_at: datetime | None = None) -> None:
        if event_id in self.recorded or event_id in self.pending:
            raise DuplicateEventError()
        self.pending[event_id] = event_type


class InMemoryUnitOfWork(UnitOfWork):
    """Unit of work over plain dicts. Account and content writes are immediate."""

    def __init__(self):
        self.accounts = InMemoryAccountRepository()
        self.contents = InMemoryContentRepository()
        self.webhook_events = InMemoryWebhookEventRepository()
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.webhook_events.recorded.update(self.webhook_events.pending)
        self.webhook_events.pending.clear()
        self.commits += 1

    async def rollback(self) -> None:
        self.webhook_events.pending.clear()
        self.rollbacks += 1


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def uow() -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork()


@pytest.fixture
def free_account(uow: InMemoryUnitOfWork) -> Account:
    """A free-plan account stored in the in-memory unit of work."""
    return uow.accounts.add(Account(email="free@example.com", first_name="Free", last_name="Creator"))


@pytest.fixture
def paid_account(uow: InMemoryUnitOfWork) -> Account:
    """An active Professional subscriber stored in the in-memory unit of work."""
    return uow.accounts.add(
        Account(
            email="paid@example.com",
            first_name="Paid",
            last_name="Creator",
            plan="professional",
            subscription_status="active",
            billing_cycle="monthly",
            stripe_customer_id="cus_paid",
            stripe_subscription_id="sub_paid",
            last_billing_event_at=datetime(2024, 1, 1, tzinfo=UTC),
        )
    )


# ============================================================================
# Database and HTTP fixtures
# ============================================================================


@pytest.fixture
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def async_client(db_session: AsyncSession, notifier: RecordingNotifier) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    # Import app here to avoid circular imports
    from main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    # No Replicate token: every video request takes the fallback path
    app.dependency_overrides[get_video_service] = lambda: ReplicateVideoService(api_token="")

    # Reset rate limiter state between tests to prevent cross-test 429s
    app.state.limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def _create_account(db_session: AsyncSession, email: str, **fields) -> AccountModel:
    account = AccountModel(
        id=str(uuid4()),
        email=email,
        password_hash=password_hasher.hash(TEST_PASSWORD),
        first_name=fields.pop("first_name", "Test"),
        last_name=fields.pop("last_name", "Creator"),
        **fields,
    )
    db_session.add(account)
    await db_session.commit()
    await db_session.refresh(account)
    return account


def _headers_for(account: AccountModel) -> dict:
    access_token = token_service.create_access_token(account.id, account.email)
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
async def test_account(db_session: AsyncSession) -> AccountModel:
    """A free-plan account with no usage."""
    return await _create_account(db_session, "test@example.com")


@pytest.fixture
def auth_headers(test_account: AccountModel) -> dict:
    """Generate authentication headers for the test account."""
    return _headers_for(test_account)


@pytest.fixture
async def exhausted_account(db_session: AsyncSession) -> AccountModel:
    """A free-plan account that has used its whole allowance."""
    return await _create_account(
        db_session,
        "exhausted@example.com",
        generations_used=settings.free_generations,
        posts_created=settings.free_generations,
    )


@pytest.fixture
def exhausted_headers(exhausted_account: AccountModel) -> dict:
    return _headers_for(exhausted_account)


@pytest.fixture
async def subscribed_account(db_session: AsyncSession) -> AccountModel:
    """
    A professional-plan account with an active Stripe subscription.

    Used for webhook lifecycle tests.
    """
    return await _create_account(
        db_session,
        "subscribed@example.com",
        plan="professional",
        subscription_status="active",
        billing_cycle="monthly",
        stripe_customer_id="cus_test_123",
        stripe_subscription_id="sub_test_123",
    )


@pytest.fixture
def subscribed_headers(subscribed_account: AccountModel) -> dict:
    return _headers_for(subscribed_account)


@pytest.fixture
async def other_account(db_session: AsyncSession) -> AccountModel:
    return await _create_account(db_session, "other@example.com", first_name="Other")


@pytest.fixture
def other_auth_headers(other_account: AccountModel) -> dict:
    return _headers_for(other_account)


# ============================================================================
# Stripe webhook fixtures
# ============================================================================


def _sign(payload: str, secret: str | None = None, timestamp: int | None = None) -> str:
    secret = secret or settings.stripe_webhook_secret
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload}".encode()
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def _event(event_type: str, obj: dict, event_id: str | None = None, created: int | None = None) -> str:
    return json.dumps(
        {
            "id": event_id or f"evt_{uuid4().hex[:16]}",
            "object": "event",
            "type": event_type,
            "created": created or int(time.time()),
            "data": {"object": obj},
        }
    )


@pytest.fixture
def sign_payload():
    """Build a Stripe-Signature header the way Stripe does."""
    return _sign


@pytest.fixture
def make_stripe_event():
    """Serialise a minimal Stripe event envelope."""
    return _event


@pytest.fixture
def checkout_completed_payload(test_account: AccountModel) -> str:
    """checkout.session.completed for the test account buying Starter."""
    return _event(
        "checkout.session.completed",
        {
            "id": "cs_test_123",
            "object": "checkout.session",
            "customer": "cus_new_456",
            "subscription": "sub_new_456",
            "status": "complete",
            "metadata": {
                "userId": test_account.id,
                "plan": "starter",
                "billingCycle": "monthly",
            },
        },
        event_id="evt_checkout_1",
    )
