"""
Subscription lifecycle handler.

Applies payment-provider events to accounts. Deliveries are at-least-once
and may arrive out of order, so every event id is recorded in the same
transaction as the account change it causes and stale events are skipped.
"""

import logging
from dataclasses import dataclass

from core.domain.account import Account, SubscriptionStatus
from core.domain.subscription import BillingEvent, BillingEventType
from core.exceptions import DuplicateEventError
from core.interfaces.repositories import UnitOfWork
from core.interfaces.services import NotificationService
from core.plans import BILLING_CYCLES, FREE_PLAN, get_plan, normalize_plan_name

logger = logging.getLogger(__name__)


# Provider subscription status -> local status
PROVIDER_STATUSES = {
    "active": SubscriptionStatus.ACTIVE,
    "trialing": SubscriptionStatus.ACTIVE,
    "past_due": SubscriptionStatus.PAST_DUE,
    "unpaid": SubscriptionStatus.PAST_DUE,
    "canceled": SubscriptionStatus.CANCELED,
    "incomplete_expired": SubscriptionStatus.CANCELED,
}


@dataclass
class LifecycleOutcome:
    """What the handler did with one event."""

    event_id: str
    event_type: str
    applied: bool = False
    duplicate: bool = False
    account_id: str | None = None
    reason: str | None = None


class SubscriptionLifecycleHandler:
    """State machine over subscription status: none, active, past_due, canceled."""

    def __init__(self, uow: UnitOfWork, notifier: NotificationService | None = None):
        self.uow = uow
        self.notifier = notifier

    async def handle(self, event: BillingEvent) -> LifecycleOutcome:
        """
        Apply one billing event.

        Already-recorded event ids are acknowledged without side effects. The
        upgrade email goes out only after the transaction commits.

        Raises:
            Exception: Storage failures propagate after rollback so the
                provider redelivers the event.
        """
        outcome = LifecycleOutcome(event_id=event.id, event_type=event.type)

        if await self.uow.webhook_events.exists(event.id):
            logger.info("Duplicate billing event %s (%s) ignored", event.id, event.type)
            outcome.duplicate = True
            return outcome

        kind = event.known_type
        account = None
        changed = False

        if kind is None:
            logger.info("Unhandled billing event type %s (%s) ignored", event.type, event.id)
            outcome.reason = "unhandled_type"
        else:
            account = await self._resolve_account(kind, event)
            if account is None:
                logger.warning(
                    "Billing event %s (%s) references no known account",
                    event.id,
                    event.type,
                    extra={"event_id": event.id, "event_type": event.type},
                )
                outcome.reason = "unknown_account"
            else:
                outcome.account_id = account.id
                skip_reason = self._skip_reason(kind, account, event)
                if skip_reason:
                    logger.info(
                        "Billing event %s (%s) skipped for account %s: %s",
                        event.id,
                        event.type,
                        account.id,
                        skip_reason,
                    )
                    outcome.reason = skip_reason
                else:
                    changed = self._apply(kind, account, event)
                    if event.created is not None:
                        account.last_billing_event_at = event.created
                    await self.uow.accounts.update_billing(account)
                    outcome.applied = changed
                    if not changed:
                        outcome.reason = "no_transition"

        try:
            await self.uow.webhook_events.record(event.id, event.type)
            await self.uow.commit()
        except DuplicateEventError:
            # A concurrent delivery of the same event committed first
            await self.uow.rollback()
            logger.info("Billing event %s already recorded by a concurrent delivery", event.id)
            return LifecycleOutcome(event_id=event.id, event_type=event.type, duplicate=True)
        except Exception:
            await self.uow.rollback()
            raise

        if changed:
            logger.info(
                "Billing event %s applied to account %s: plan=%s status=%s",
                event.id,
                account.id,
                account.plan,
                account.subscription_status,
                extra={"account_id": account.id, "event_id": event.id, "event_type": event.type},
            )

        if changed and kind == BillingEventType.CHECKOUT_COMPLETED and self.notifier is not None:
            await self.notifier.send_upgrade_notification(account, get_plan(account.plan).display_name)

        return outcome

    async def _resolve_account(self, kind: BillingEventType, event: BillingEvent) -> Account | None:
        # Row lock held until commit so concurrent events for one account apply in turn
        accounts = self.uow.accounts
        if kind == BillingEventType.CHECKOUT_COMPLETED and event.account_id:
            account = await accounts.get_by_id(event.account_id, for_update=True)
            if account is not None:
                return account
        if event.subscription_id:
            account = await accounts.get_by_stripe_subscription_id(event.subscription_id, for_update=True)
            if account is not None:
                return account
        if event.customer_id:
            return await accounts.get_by_stripe_customer_id(event.customer_id, for_update=True)
        return None

    @staticmethod
    def _skip_reason(kind: BillingEventType, account: Account, event: BillingEvent) -> str | None:
        last = account.last_billing_event_at
        if event.created is not None and last is not None and event.created < last:
            return "stale_event"

        if kind == BillingEventType.CHECKOUT_COMPLETED:
            return None

        current = account.stripe_subscription_id
        if current is None:
            return "no_subscription"
        if event.subscription_id and event.subscription_id != current:
            return "subscription_mismatch"
        return None

    def _apply(self, kind: BillingEventType, account: Account, event: BillingEvent) -> bool:
        if kind == BillingEventType.CHECKOUT_COMPLETED:
            return self._activate(account, event)
        if kind == BillingEventType.PAYMENT_FAILED:
            return self._transition(account, {SubscriptionStatus.ACTIVE}, SubscriptionStatus.PAST_DUE)
        if kind == BillingEventType.PAYMENT_SUCCEEDED:
            return self._transition(account, {SubscriptionStatus.PAST_DUE}, SubscriptionStatus.ACTIVE)
        if kind == BillingEventType.SUBSCRIPTION_DELETED:
            return self._cancel(account)
        return self._sync_status(account, event)

    @staticmethod
    def _activate(account: Account, event: BillingEvent) -> bool:
        plan = normalize_plan_name(event.plan)
        if plan is None or plan == FREE_PLAN:
            logger.warning("Checkout %s carried unknown plan %r; account %s unchanged", event.id, event.plan, account.id)
            return False

        account.plan = plan
        account.subscription_status = SubscriptionStatus.ACTIVE
        account.billing_cycle = event.billing_cycle if event.billing_cycle in BILLING_CYCLES else "monthly"
        if event.customer_id:
            account.stripe_customer_id = event.customer_id
        if event.subscription_id:
            account.stripe_subscription_id = event.subscription_id
        return True

    @staticmethod
    def _transition(account: Account, sources: set[SubscriptionStatus], target: SubscriptionStatus) -> bool:
        if account.subscription_status not in sources:
            return False
        account.subscription_status = target
        return True

    @staticmethod
    def _cancel(account: Account) -> bool:
        if not account.has_paid_subscription:
            return False
        # Paid quota is revoked immediately
        account.subscription_status = SubscriptionStatus.CANCELED
        account.plan = FREE_PLAN
        account.billing_cycle = None
        return True

    def _sync_status(self, account: Account, event: BillingEvent) -> bool:
        target = PROVIDER_STATUSES.get((event.status or "").lower())
        if target is None or target == account.subscription_status:
            return False
        if target == SubscriptionStatus.CANCELED:
            return self._cancel(account)
        if account.subscription_status == SubscriptionStatus.CANCELED:
            # A canceled subscription never comes back; a new checkout is required
            return False
        account.subscription_status = target
        return True
