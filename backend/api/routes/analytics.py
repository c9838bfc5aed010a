"""
Analytics routes: aggregate counts over the content library.
"""

from fastapi import APIRouter, Depends

from api.deps import CurrentAccount, get_uow
from api.schemas.analytics import AnalyticsResponse
from api.schemas.common import UsageResponse
from core.interfaces.repositories import UnitOfWork
from services.freemium_gate import remaining_free

router = APIRouter(tags=["Analytics"])


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    current_account: CurrentAccount,
    uow: UnitOfWork = Depends(get_uow),
) -> AnalyticsResponse:
    by_platform = await uow.contents.count_by_platform(current_account.id)
    by_type = await uow.contents.count_by_type(current_account.id)
    usage = current_account.usage
    return AnalyticsResponse(
        total_posts=sum(by_type.values()),
        posts_by_platform=by_platform,
        posts_by_type=by_type,
        usage=UsageResponse(
            generations_used=usage.generations_used,
            posts_created=usage.posts_created,
        ),
        plan=current_account.plan,
        subscription_status=current_account.subscription_status.value,
        remaining_free=remaining_free(current_account.plan, usage.generations_used),
    )
