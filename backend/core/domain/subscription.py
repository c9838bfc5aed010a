"""Billing event domain entities."""
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class BillingEventType(StrEnum):
    """Payment-provider notifications the lifecycle handler reacts to."""

    CHECKOUT_COMPLETED = "checkout.session.completed"
    SUBSCRIPTION_CREATED = "customer.subscription.created"
    SUBSCRIPTION_UPDATED = "customer.subscription.updated"
    SUBSCRIPTION_DELETED = "customer.subscription.deleted"
    PAYMENT_SUCCEEDED = "invoice.payment_succeeded"
    PAYMENT_FAILED = "invoice.payment_failed"


@dataclass(frozen=True)
class BillingEvent:
    """
    An incoming notification from the payment provider.

    Transient: consumed once by the lifecycle handler and never stored
    beyond its id (see ProcessedWebhookEvent).
    """

    id: str
    type: str
    created: datetime | None = None
    account_id: str | None = None
    plan: str | None = None
    billing_cycle: str | None = None
    customer_id: str | None = None
    subscription_id: str | None = None
    status: str | None = None

    @property
    def known_type(self) -> BillingEventType | None:
        try:
            return BillingEventType(self.type)
        except ValueError:
            return None
