"""
Freemium gate.

Pure decision function consulted before every generation. It reads the
account's plan and usage and never mutates either; the usage ledger does
the counting.
"""

from dataclasses import dataclass
from enum import StrEnum

from core.domain.account import UsageRecord
from core.exceptions import QuotaExceededError
from core.plans import FREE_PLAN, get_plan
from infrastructure.config.settings import settings


class GateDecision(StrEnum):
    ALLOWED = "allowed"
    DENIED_LIMIT_REACHED = "denied_limit_reached"
    DENIED_PLAN_EXCEEDED = "denied_plan_exceeded"


@dataclass(frozen=True)
class GateResult:
    """Outcome of a gate evaluation."""

    decision: GateDecision
    plan: str
    remaining_free: int | None
    upgrade_required: bool
    should_show_upgrade: bool

    @property
    def allowed(self) -> bool:
        return self.decision == GateDecision.ALLOWED

    def to_error(self) -> QuotaExceededError:
        if self.decision == GateDecision.DENIED_PLAN_EXCEEDED:
            message = (
                f"You have used all generations included in the {get_plan(self.plan).display_name} "
                "plan. Upgrade to continue creating content."
            )
        else:
            message = "You have used all your free generations. Upgrade to continue creating content."
        return QuotaExceededError(
            message,
            upgrade_required=True,
            remaining_free=self.remaining_free,
            plan=self.plan,
        )


def remaining_free(plan: str, generations_used: int, free_generations: int | None = None) -> int | None:
    """Free generations left for a free account; None for paid plans."""
    if get_plan(plan).name != FREE_PLAN:
        return None
    limit = settings.free_generations if free_generations is None else free_generations
    return max(limit - generations_used, 0)


def evaluate(
    plan: str | None,
    usage: UsageRecord | None,
    *,
    free_generations: int | None = None,
    upgrade_prompt_after: int | None = None,
) -> GateResult:
    """
    Decide whether one more generation is allowed.

    Args:
        plan: Plan name; unknown names are treated as the free tier
        usage: Current counters; None counts as zero usage
        free_generations: Override for the free allowance
        upgrade_prompt_after: Override for where the upgrade prompt starts

    Returns:
        GateResult with the decision and the upgrade flags
    """
    definition = get_plan(plan)
    used = usage.generations_used if usage is not None else 0
    free_limit = settings.free_generations if free_generations is None else free_generations
    prompt_after = settings.upgrade_prompt_after if upgrade_prompt_after is None else upgrade_prompt_after

    if definition.is_free:
        left = max(free_limit - used, 0)
        if used >= free_limit:
            return GateResult(
                decision=GateDecision.DENIED_LIMIT_REACHED,
                plan=definition.name,
                remaining_free=0,
                upgrade_required=True,
                should_show_upgrade=True,
            )
        return GateResult(
            decision=GateDecision.ALLOWED,
            plan=definition.name,
            remaining_free=left,
            upgrade_required=False,
            should_show_upgrade=prompt_after <= used < free_limit,
        )

    if not definition.is_unbounded and used >= definition.generation_quota:
        return GateResult(
            decision=GateDecision.DENIED_PLAN_EXCEEDED,
            plan=definition.name,
            remaining_free=None,
            upgrade_required=True,
            should_show_upgrade=False,
        )
    return GateResult(
        decision=GateDecision.ALLOWED,
        plan=definition.name,
        remaining_free=None,
        upgrade_required=False,
        should_show_upgrade=False,
    )
