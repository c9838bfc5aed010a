"""
Processed webhook event ledger backed by SQLAlchemy.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateEventError
from core.interfaces.repositories import WebhookEventRepository
from infrastructure.database.models import ProcessedWebhookEvent


class SqlAlchemyWebhookEventRepository(WebhookEventRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def exists(self, event_id: str) -> bool:
        result = await self._session.execute(
            select(ProcessedWebhookEvent.id).where(ProcessedWebhookEvent.event_id == event_id)
        )
        return result.scalar_one_or_none() is not None

    async def record(self, event_id: str, event_type: str, processed_at: datetime | None = None) -> None:
        row = ProcessedWebhookEvent(event_id=event_id, event_type=event_type)
        if processed_at is not None:
            row.processed_at = processed_at
        self._session.add(row)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise DuplicateEventError(f"Event {event_id} already processed") from exc
