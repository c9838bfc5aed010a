"""
Unit of work over a single AsyncSession.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from core.interfaces.repositories import UnitOfWork

from .accounts import SqlAlchemyAccountRepository
from .contents import SqlAlchemyContentRepository
from .webhook_events import SqlAlchemyWebhookEventRepository


class SqlAlchemyUnitOfWork(UnitOfWork):
    """All repositories share one session, so one commit covers every change."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.accounts = SqlAlchemyAccountRepository(session)
        self.contents = SqlAlchemyContentRepository(session)
        self.webhook_events = SqlAlchemyWebhookEventRepository(session)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
