"""
Account repository backed by SQLAlchemy.
"""

from datetime import UTC, datetime

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.account import Account, SubscriptionStatus, UsageRecord
from core.interfaces.repositories import AccountRepository
from infrastructure.database.models import AccountModel

# Columns a profile edit may write
PROFILE_FIELDS = ("first_name", "last_name", "company")


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: AccountModel) -> Account:
    return Account(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        first_name=row.first_name,
        last_name=row.last_name,
        company=row.company,
        plan=row.plan,
        subscription_status=SubscriptionStatus(row.subscription_status),
        billing_cycle=row.billing_cycle,
        stripe_customer_id=row.stripe_customer_id,
        stripe_subscription_id=row.stripe_subscription_id,
        last_billing_event_at=_as_utc(row.last_billing_event_at),
        usage=UsageRecord(
            generations_used=row.generations_used,
            posts_created=row.posts_created,
        ),
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class SqlAlchemyAccountRepository(AccountRepository):
    """Accounts table access. Never commits; the unit of work owns the transaction."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _fetch_one(self, *criteria, for_update: bool = False) -> Account | None:
        stmt = select(AccountModel).where(*criteria).execution_options(populate_existing=True)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()
        return _to_domain(row) if row else None

    async def create(self, account: Account) -> Account:
        row = AccountModel(
            id=account.id,
            email=account.email.lower(),
            password_hash=account.password_hash,
            first_name=account.first_name,
            last_name=account.last_name,
            company=account.company,
            plan=account.plan,
            subscription_status=account.subscription_status.value,
            billing_cycle=account.billing_cycle,
            stripe_customer_id=account.stripe_customer_id,
            stripe_subscription_id=account.stripe_subscription_id,
            generations_used=account.usage.generations_used,
            posts_created=account.usage.posts_created,
        )
        self._session.add(row)
        await self._session.flush()
        await self._session.refresh(row)
        return _to_domain(row)

    async def get_by_id(self, account_id: str, *, for_update: bool = False) -> Account | None:
        return await self._fetch_one(AccountModel.id == account_id, for_update=for_update)

    async def get_by_email(self, email: str) -> Account | None:
        return await self._fetch_one(AccountModel.email == email.strip().lower())

    async def get_by_stripe_customer_id(self, customer_id: str, *, for_update: bool = False) -> Account | None:
        return await self._fetch_one(AccountModel.stripe_customer_id == customer_id, for_update=for_update)

    async def get_by_stripe_subscription_id(
        self, subscription_id: str, *, for_update: bool = False
    ) -> Account | None:
        return await self._fetch_one(
            AccountModel.stripe_subscription_id == subscription_id, for_update=for_update
        )

    async def update_profile(self, account_id: str, changes: dict[str, str | None]) -> Account | None:
        values = {field: value for field, value in changes.items() if field in PROFILE_FIELDS}
        if values:
            await self._session.execute(
                update(AccountModel)
                .where(AccountModel.id == account_id)
                .values(**values, updated_at=datetime.now(UTC))
                .execution_options(synchronize_session=False)
            )
        return await self.get_by_id(account_id)

    async def update_billing(self, account: Account) -> Account:
        await self._session.execute(
            update(AccountModel)
            .where(AccountModel.id == account.id)
            .values(
                plan=account.plan,
                subscription_status=account.subscription_status.value,
                billing_cycle=account.billing_cycle,
                stripe_customer_id=account.stripe_customer_id,
                stripe_subscription_id=account.stripe_subscription_id,
                last_billing_event_at=account.last_billing_event_at,
                updated_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session=False)
        )
        return await self.get_by_id(account.id) or account

    async def try_consume_generation(self, account_id: str, quota: int | None) -> bool:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(
                generations_used=AccountModel.generations_used + 1,
                posts_created=AccountModel.posts_created + 1,
                updated_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session=False)
        )
        if quota is not None:
            stmt = stmt.where(AccountModel.generations_used < quota)

        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def release_generation(self, account_id: str) -> None:
        await self._session.execute(
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(
                generations_used=case(
                    (AccountModel.generations_used > 0, AccountModel.generations_used - 1),
                    else_=0,
                ),
                posts_created=case(
                    (AccountModel.posts_created > 0, AccountModel.posts_created - 1),
                    else_=0,
                ),
            )
            .execution_options(synchronize_session=False)
        )
