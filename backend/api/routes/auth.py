"""
Authentication API routes.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import IntegrityError

from api.deps import CurrentAccount, get_notifier, get_uow, token_service
from api.middleware.rate_limit import RATE_LIMITS, limiter
from api.schemas.auth import AccountResponse, AuthResponse, LoginRequest, RegisterRequest
from core.domain.account import Account
from core.exceptions import AuthError, ConflictError
from core.interfaces.repositories import UnitOfWork
from core.interfaces.services import NotificationService
from core.security.password import password_hasher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_response(account: Account) -> AuthResponse:
    return AuthResponse(
        token=token_service.create_access_token(account.id, account.email),
        expires_in=token_service.access_token_expire_seconds,
        user=AccountResponse.from_account(account),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["register"])
async def register(
    request: Request,
    register_data: RegisterRequest,
    uow: UnitOfWork = Depends(get_uow),
    notifier: NotificationService = Depends(get_notifier),
) -> AuthResponse:
    """
    Register a new account on the free plan.
    """
    email = register_data.email.lower()
    if await uow.accounts.get_by_email(email):
        raise ConflictError("User already exists with this email")

    account = Account(
        email=email,
        password_hash=password_hasher.hash(register_data.password),
        first_name=register_data.first_name,
        last_name=register_data.last_name,
        company=register_data.company,
    )
    try:
        account = await uow.accounts.create(account)
        await uow.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        await uow.rollback()
        raise ConflictError("User already exists with this email") from e

    logger.info("Account registered: %s", account.id, extra={"account_id": account.id})

    # Never raises; registration succeeds even if the email does not go out
    await notifier.send_welcome_email(account)

    return _auth_response(account)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(RATE_LIMITS["login"])
async def login(
    request: Request,
    login_data: LoginRequest,
    uow: UnitOfWork = Depends(get_uow),
) -> AuthResponse:
    """
    Exchange email and password for a bearer token.
    """
    account = await uow.accounts.get_by_email(login_data.email)
    if account is None or not password_hasher.verify(login_data.password, account.password_hash):
        logger.info("Failed login attempt")
        raise AuthError("Invalid credentials")

    logger.info("Account logged in: %s", account.id, extra={"account_id": account.id})
    return _auth_response(account)


@router.get("/me", response_model=AccountResponse)
async def get_me(current_account: CurrentAccount) -> AccountResponse:
    """Get the authenticated account."""
    return AccountResponse.from_account(current_account)
