"""
API dependencies: unit of work, current account and service providers.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.ai.video_adapter import ReplicateVideoService
from adapters.email.resend_adapter import email_service
from adapters.payments.stripe_adapter import StripePaymentService
from core.domain.account import Account
from core.exceptions import AuthError, InvalidTokenError
from core.interfaces.repositories import UnitOfWork
from core.interfaces.services import NotificationService, PaymentService, VideoService
from core.security.tokens import TokenService
from infrastructure.config.settings import settings
from infrastructure.database.connection import get_db
from infrastructure.repositories import SqlAlchemyUnitOfWork
from services.generation import GenerationService
from services.subscription_lifecycle import SubscriptionLifecycleHandler

token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
    access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
)


async def get_uow(db: AsyncSession = Depends(get_db)) -> UnitOfWork:
    return SqlAlchemyUnitOfWork(db)


async def get_current_account(
    authorization: Annotated[str | None, Header()] = None,
    uow: UnitOfWork = Depends(get_uow),
) -> Account:
    """
    Resolve the bearer token to an account.

    Missing token and unknown account are 401; a token that fails
    verification (bad signature, expired) is 403.
    """
    token = None
    if authorization and authorization.startswith("Bearer "):
        token = authorization[len("Bearer "):].strip() or None

    if not token:
        raise AuthError("Access token required")

    payload = token_service.verify_access_token(token)
    if not payload:
        raise InvalidTokenError("Invalid or expired token")

    account = await uow.accounts.get_by_id(payload.sub)
    if account is None:
        raise AuthError("User not found")
    return account


CurrentAccount = Annotated[Account, Depends(get_current_account)]


@lru_cache
def get_video_service() -> VideoService:
    return ReplicateVideoService()


@lru_cache
def get_payment_service() -> PaymentService:
    return StripePaymentService()


def get_notifier() -> NotificationService:
    return email_service


def get_generation_service(
    uow: UnitOfWork = Depends(get_uow),
    video_service: VideoService = Depends(get_video_service),
    notifier: NotificationService = Depends(get_notifier),
) -> GenerationService:
    return GenerationService(uow, video_service=video_service, notifier=notifier)


def get_lifecycle_handler(
    uow: UnitOfWork = Depends(get_uow),
    notifier: NotificationService = Depends(get_notifier),
) -> SubscriptionLifecycleHandler:
    return SubscriptionLifecycleHandler(uow, notifier=notifier)
