"""
Billing and subscription request/response schemas.
"""

from typing import Optional

from pydantic import Field, field_validator

from core.plans import BILLING_CYCLES, FREE_PLAN, PlanDefinition, normalize_plan_name

from .common import CamelModel


class PlanInfo(CamelModel):
    """Information about a subscription plan."""

    id: str = Field(..., description="Plan ID (free, starter, professional, enterprise)")
    name: str = Field(..., description="Display name of the plan")
    generation_quota: Optional[int] = Field(..., description="Generations included (null for unlimited)")
    price_monthly: int = Field(..., description="Monthly price in USD")
    price_yearly: int = Field(..., description="Yearly price in USD")
    features: list[str] = Field(..., description="List of features included in the plan")

    @classmethod
    def from_plan(cls, plan: PlanDefinition) -> "PlanInfo":
        return cls(
            id=plan.name,
            name=plan.display_name,
            generation_quota=plan.generation_quota,
            price_monthly=plan.price_monthly,
            price_yearly=plan.price_yearly,
            features=list(plan.features),
        )


class PricingResponse(CamelModel):
    """Response containing all available pricing plans."""

    plans: list[PlanInfo] = Field(..., description="List of all available plans")
    free_generations: int = Field(..., description="Generations included in the free tier")


class CheckoutRequest(CamelModel):
    """Request to start a subscription checkout."""

    plan: str = Field(..., description="Paid plan to subscribe to")
    billing_cycle: str = Field(default="monthly", description="monthly or yearly")

    @field_validator("plan")
    @classmethod
    def validate_plan(cls, v: str) -> str:
        plan = normalize_plan_name(v)
        if plan is None or plan == FREE_PLAN:
            raise ValueError("Invalid plan")
        return plan

    @field_validator("billing_cycle")
    @classmethod
    def validate_billing_cycle(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if v not in BILLING_CYCLES:
            raise ValueError("Billing cycle must be monthly or yearly")
        return v


class CheckoutResponse(CamelModel):
    """Hosted checkout session."""

    session_id: str = Field(..., description="Stripe checkout session ID")
    url: Optional[str] = Field(default=None, description="Hosted checkout page URL")


class WebhookAck(CamelModel):
    """Acknowledgement returned to the payment provider."""

    received: bool = True
    duplicate: bool = False
