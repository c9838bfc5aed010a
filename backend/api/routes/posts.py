"""
Content library routes.
"""

import logging

from fastapi import APIRouter, Depends, Query

from api.deps import CurrentAccount, get_uow
from api.schemas.content import DeleteResponse, PostListResponse, PostResponse
from core.exceptions import NotFoundError
from core.interfaces.repositories import UnitOfWork

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get("", response_model=PostListResponse)
async def list_posts(
    current_account: CurrentAccount,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    uow: UnitOfWork = Depends(get_uow),
) -> PostListResponse:
    """List the account's posts, newest first."""
    items = await uow.contents.list_for_account(current_account.id, skip=skip, limit=limit)
    counts = await uow.contents.count_by_type(current_account.id)
    return PostListResponse(
        posts=[PostResponse.from_item(item) for item in items],
        total=sum(counts.values()),
        skip=skip,
        limit=limit,
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    current_account: CurrentAccount,
    uow: UnitOfWork = Depends(get_uow),
) -> PostResponse:
    item = await uow.contents.get_for_account(post_id, current_account.id)
    if item is None:
        raise NotFoundError("Post not found")
    return PostResponse.from_item(item)


@router.delete("/{post_id}", response_model=DeleteResponse)
async def delete_post(
    post_id: str,
    current_account: CurrentAccount,
    uow: UnitOfWork = Depends(get_uow),
) -> DeleteResponse:
    """Delete a post. Usage counters are not refunded."""
    deleted = await uow.contents.delete_for_account(post_id, current_account.id)
    if not deleted:
        raise NotFoundError("Post not found")
    await uow.commit()
    logger.info("Post %s deleted by account %s", post_id, current_account.id)
    return DeleteResponse(message="Post deleted successfully")
