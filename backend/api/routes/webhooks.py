"""
Payment provider webhook routes.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request

from api.deps import get_lifecycle_handler, get_payment_service
from api.middleware.rate_limit import RATE_LIMITS, limiter
from api.schemas.billing import WebhookAck
from core.exceptions import InfluencoreError, InternalError
from core.interfaces.services import PaymentService
from services.subscription_lifecycle import SubscriptionLifecycleHandler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


@router.post("/stripe", response_model=WebhookAck)
@limiter.limit(RATE_LIMITS["webhook"])
async def stripe_webhook(
    request: Request,
    stripe_signature: Annotated[str | None, Header()] = None,
    payments: PaymentService = Depends(get_payment_service),
    handler: SubscriptionLifecycleHandler = Depends(get_lifecycle_handler),
) -> WebhookAck:
    """
    Handle Stripe webhook deliveries.

    The raw body is signature-verified before anything is parsed. A failure
    while applying the event returns 500 so Stripe redelivers it; the
    transaction has been rolled back by then.
    """
    payload = await request.body()
    event = payments.parse_webhook(payload, stripe_signature)

    try:
        outcome = await handler.handle(event)
    except InfluencoreError:
        raise
    except Exception as e:
        logger.error(
            "Webhook processing failed for event %s (%s): %s",
            event.id,
            event.type,
            e,
            exc_info=True,
            extra={"event_id": event.id, "event_type": event.type},
        )
        raise InternalError("Webhook processing failed") from e

    return WebhookAck(received=True, duplicate=outcome.duplicate)
