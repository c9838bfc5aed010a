"""
Content repository backed by SQLAlchemy.
"""

from datetime import UTC

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.content import ContentItem
from core.interfaces.repositories import ContentRepository
from infrastructure.database.models import ContentItemModel


def _to_domain(row: ContentItemModel) -> ContentItem:
    created_at = row.created_at
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return ContentItem(
        id=row.id,
        account_id=row.account_id,
        title=row.title,
        body=row.body,
        platform=row.platform,
        content_type=row.content_type,
        mode=row.mode,
        status=row.status,
        metadata=row.extra or {},
        created_at=created_at,
    )


class SqlAlchemyContentRepository(ContentRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, item: ContentItem) -> ContentItem:
        row = ContentItemModel(
            id=item.id,
            account_id=item.account_id,
            title=item.title,
            body=item.body,
            platform=item.platform,
            content_type=item.content_type.value,
            mode=item.mode,
            status=item.status.value,
            extra=item.metadata or None,
            created_at=item.created_at,
        )
        self._session.add(row)
        await self._session.flush()
        return _to_domain(row)

    async def get_for_account(self, item_id: str, account_id: str) -> ContentItem | None:
        result = await self._session.execute(
            select(ContentItemModel).where(
                ContentItemModel.id == item_id,
                ContentItemModel.account_id == account_id,
            )
        )
        row = result.scalar_one_or_none()
        return _to_domain(row) if row else None

    async def list_for_account(self, account_id: str, skip: int = 0, limit: int = 100) -> list[ContentItem]:
        result = await self._session.execute(
            select(ContentItemModel)
            .where(ContentItemModel.account_id == account_id)
            .order_by(ContentItemModel.created_at.desc(), ContentItemModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return [_to_domain(row) for row in result.scalars().all()]

    async def delete_for_account(self, item_id: str, account_id: str) -> bool:
        result = await self._session.execute(
            delete(ContentItemModel).where(
                ContentItemModel.id == item_id,
                ContentItemModel.account_id == account_id,
            )
        )
        return result.rowcount > 0

    async def _count_by(self, column, account_id: str) -> dict[str, int]:
        result = await self._session.execute(
            select(column, func.count(ContentItemModel.id))
            .where(ContentItemModel.account_id == account_id)
            .group_by(column)
        )
        return {key: count for key, count in result.all()}

    async def count_by_platform(self, account_id: str) -> dict[str, int]:
        return await self._count_by(ContentItemModel.platform, account_id)

    async def count_by_type(self, account_id: str) -> dict[str, int]:
        return await self._count_by(ContentItemModel.content_type, account_id)
