"""
Plan configuration for subscription tiers.

This module is the single source of truth for plan quotas and prices.
It lives in core/ so both service and API layers can import from it
without creating circular dependencies.
"""

from dataclasses import dataclass, field
from types import MappingProxyType

from infrastructure.config.settings import settings

FREE_PLAN = "free"

BILLING_CYCLES = ("monthly", "yearly")


@dataclass(frozen=True)
class PlanDefinition:
    """A named service tier. ``generation_quota`` of None means unbounded."""

    name: str
    display_name: str
    generation_quota: int | None
    price_monthly: int
    price_yearly: int
    features: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_free(self) -> bool:
        return self.name == FREE_PLAN

    @property
    def is_unbounded(self) -> bool:
        return self.generation_quota is None

    def price_for(self, billing_cycle: str) -> int:
        """Price in whole currency units for one billing cycle."""
        return self.price_yearly if billing_cycle == "yearly" else self.price_monthly


def _build_catalog(free_generations: int) -> MappingProxyType:
    plans = (
        PlanDefinition(
            name=FREE_PLAN,
            display_name="Free",
            generation_quota=free_generations,
            price_monthly=0,
            price_yearly=0,
            features=(
                f"{free_generations} free generations",
                "1 connected platform",
                "Content library",
            ),
        ),
        PlanDefinition(
            name="starter",
            display_name="Starter",
            generation_quota=50,
            price_monthly=19,
            price_yearly=190,
            features=(
                "50 generations",
                "All content modes",
                "Video generation",
                "Email support",
            ),
        ),
        PlanDefinition(
            name="professional",
            display_name="Professional",
            generation_quota=500,
            price_monthly=49,
            price_yearly=490,
            features=(
                "500 generations",
                "All content modes",
                "Video generation",
                "Analytics",
                "Priority support",
            ),
        ),
        PlanDefinition(
            name="enterprise",
            display_name="Enterprise",
            generation_quota=None,
            price_monthly=199,
            price_yearly=1990,
            features=(
                "Unlimited generations",
                "All content modes",
                "Video generation",
                "Analytics",
                "Dedicated support",
            ),
        ),
    )
    return MappingProxyType({plan.name: plan for plan in plans})


# Plan catalog keyed by plan name. Read-only.
PLANS = _build_catalog(settings.free_generations)

PAID_PLANS = tuple(name for name in PLANS if name != FREE_PLAN)


def normalize_plan_name(name: str | None) -> str | None:
    """Map a user-supplied plan name ("Starter", " PROFESSIONAL ") to a catalog key, or None."""
    if not name:
        return None
    key = name.strip().lower()
    return key if key in PLANS else None


def get_plan(name: str | None) -> PlanDefinition:
    """Look up a plan, falling back to the free tier for unknown names."""
    return PLANS.get(normalize_plan_name(name) or FREE_PLAN, PLANS[FREE_PLAN])


def plan_quota(name: str | None) -> int | None:
    """Generation quota for a plan; None means unbounded."""
    return get_plan(name).generation_quota
