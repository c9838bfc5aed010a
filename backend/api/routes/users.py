"""
Account profile routes.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import CurrentAccount, get_uow
from api.schemas.auth import AccountResponse
from api.schemas.user import ProfileUpdateRequest
from core.exceptions import AuthError
from core.interfaces.repositories import UnitOfWork

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["User"])


@router.get("/profile", response_model=AccountResponse)
async def get_profile(current_account: CurrentAccount) -> AccountResponse:
    return AccountResponse.from_account(current_account)


@router.put("/profile", response_model=AccountResponse)
async def update_profile(
    data: ProfileUpdateRequest,
    current_account: CurrentAccount,
    uow: UnitOfWork = Depends(get_uow),
) -> AccountResponse:
    """Update name and company. Plan and usage are not editable here."""
    changes = data.model_dump(exclude_unset=True)

    account = await uow.accounts.update_profile(current_account.id, changes)
    if account is None:
        raise AuthError("User not found")
    await uow.commit()
    logger.info("Profile updated for account %s: %s", account.id, sorted(changes))
    return AccountResponse.from_account(account)
