"""
Payment routes: pricing catalog and Stripe checkout.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import CurrentAccount, get_payment_service
from api.schemas.billing import CheckoutRequest, CheckoutResponse, PlanInfo, PricingResponse
from core.interfaces.services import PaymentService
from core.plans import PLANS
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.get("/plans", response_model=PricingResponse)
async def get_pricing() -> PricingResponse:
    """
    Get all available pricing plans.

    Public endpoint - no authentication required.
    """
    return PricingResponse(
        plans=[PlanInfo.from_plan(plan) for plan in PLANS.values()],
        free_generations=settings.free_generations,
    )


@router.post("/create-checkout-session", response_model=CheckoutResponse)
async def create_checkout_session(
    data: CheckoutRequest,
    current_account: CurrentAccount,
    payments: PaymentService = Depends(get_payment_service),
) -> CheckoutResponse:
    """
    Start a hosted Stripe checkout for a paid plan.

    The account id, plan and billing cycle travel in the session metadata
    and come back on checkout.session.completed.
    """
    session = await payments.create_checkout_session(current_account, data.plan, data.billing_cycle)
    return CheckoutResponse(session_id=session.session_id, url=session.url)
