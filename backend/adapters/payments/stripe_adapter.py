"""
Stripe payment adapter.

Creates hosted subscription checkout sessions and turns signed webhook
deliveries into BillingEvent objects for the lifecycle handler.
"""

import asyncio
import json
import logging
from datetime import UTC, datetime
from typing import Any

import stripe

from core.domain.account import Account
from core.domain.subscription import BillingEvent
from core.exceptions import UpstreamProviderError, ValidationError, WebhookNotConfiguredError
from core.interfaces.services import CheckoutSession, PaymentService
from core.plans import BILLING_CYCLES, get_plan
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

# Seconds a signed delivery stays valid
SIGNATURE_TOLERANCE = 300


def _id_of(value: Any) -> str | None:
    """Stripe fields may be a bare id or an expanded object."""
    if isinstance(value, dict):
        return value.get("id")
    return value or None


def _invoice_subscription(invoice: dict[str, Any]) -> str | None:
    subscription = _id_of(invoice.get("subscription"))
    if subscription:
        return subscription
    # Newer API versions nest it under parent.subscription_details
    details = (invoice.get("parent") or {}).get("subscription_details") or {}
    return _id_of(details.get("subscription"))


def to_billing_event(data: dict[str, Any]) -> BillingEvent:
    """Normalise a Stripe event payload."""
    event_type = data.get("type") or ""
    obj = (data.get("data") or {}).get("object") or {}
    metadata = obj.get("metadata") or {}
    created = data.get("created")

    fields: dict[str, Any] = {
        "customer_id": _id_of(obj.get("customer")),
        "account_id": metadata.get("userId"),
        "plan": metadata.get("plan"),
        "billing_cycle": metadata.get("billingCycle"),
    }
    if event_type == "checkout.session.completed":
        fields["subscription_id"] = _id_of(obj.get("subscription"))
        fields["status"] = obj.get("status")
    elif event_type.startswith("customer.subscription."):
        fields["subscription_id"] = obj.get("id")
        fields["status"] = obj.get("status")
    elif event_type.startswith("invoice."):
        fields["subscription_id"] = _invoice_subscription(obj)
        fields["status"] = obj.get("status")

    return BillingEvent(
        id=data.get("id") or "",
        type=event_type,
        created=datetime.fromtimestamp(created, tz=UTC) if created else None,
        **fields,
    )


class StripePaymentService(PaymentService):
    """Stripe checkout and webhook verification."""

    def __init__(
        self,
        api_key: str | None = None,
        webhook_secret: str | None = None,
        timeout: float | None = None,
    ):
        self._api_key = api_key if api_key is not None else settings.stripe_secret_key
        self._webhook_secret = webhook_secret if webhook_secret is not None else settings.stripe_webhook_secret
        self._timeout = timeout or settings.stripe_timeout
        self._currency = settings.stripe_currency
        self._frontend_url = settings.frontend_url

    async def create_checkout_session(
        self,
        account: Account,
        plan_name: str,
        billing_cycle: str,
    ) -> CheckoutSession:
        """
        Create a subscription checkout session.

        Args:
            account: Paying account; its id travels in the session metadata
            plan_name: Paid catalog plan
            billing_cycle: "monthly" or "yearly"

        Returns:
            CheckoutSession with the session id and hosted URL

        Raises:
            UpstreamProviderError: Stripe is not configured or the call failed
        """
        if not self._api_key:
            logger.error("Checkout requested but STRIPE_SECRET_KEY is not configured")
            raise UpstreamProviderError("Payment processing is not configured", provider="stripe")

        plan = get_plan(plan_name)
        cycle = billing_cycle if billing_cycle in BILLING_CYCLES else "monthly"
        metadata = {"userId": account.id, "plan": plan.name, "billingCycle": cycle}

        params = {
            "api_key": self._api_key,
            "payment_method_types": ["card"],
            "mode": "subscription",
            "line_items": [
                {
                    "price_data": {
                        "currency": self._currency,
                        "product_data": {
                            "name": f"{plan.display_name} Plan",
                            "description": f"Influencore {plan.display_name} Plan - {cycle} billing",
                        },
                        "unit_amount": plan.price_for(cycle) * 100,
                        "recurring": {"interval": "year" if cycle == "yearly" else "month"},
                    },
                    "quantity": 1,
                }
            ],
            "success_url": f"{self._frontend_url}/billing?success=true",
            "cancel_url": f"{self._frontend_url}/pricing?canceled=true",
            "metadata": metadata,
            "subscription_data": {"metadata": metadata},
        }
        if account.stripe_customer_id:
            params["customer"] = account.stripe_customer_id
        else:
            params["customer_email"] = account.email

        try:
            session = await asyncio.wait_for(
                asyncio.to_thread(stripe.checkout.Session.create, **params),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("Stripe checkout session timed out for account %s", account.id)
            raise UpstreamProviderError("Payment provider timed out", provider="stripe") from e
        except stripe.StripeError as e:
            logger.error("Stripe checkout session failed for account %s: %s", account.id, e)
            raise UpstreamProviderError("Payment session creation failed", provider="stripe") from e

        logger.info("Created checkout session %s for account %s (%s, %s)", session.id, account.id, plan.name, cycle)
        return CheckoutSession(session_id=session.id, url=getattr(session, "url", None))

    def parse_webhook(self, payload: bytes, signature: str | None) -> BillingEvent:
        """
        Verify a webhook delivery and normalise it.

        Raises:
            WebhookNotConfiguredError: No signing secret is configured
            ValidationError: Missing or invalid signature, or malformed body
        """
        if not self._webhook_secret:
            logger.error("Webhook rejected: STRIPE_WEBHOOK_SECRET not configured")
            raise WebhookNotConfiguredError()
        if not signature:
            logger.warning("Webhook received without signature")
            raise ValidationError("Missing stripe-signature header")

        try:
            stripe.Webhook.construct_event(
                payload,
                signature,
                self._webhook_secret,
                tolerance=SIGNATURE_TOLERANCE,
            )
        except stripe.SignatureVerificationError as e:
            logger.warning("Invalid webhook signature: %s", e)
            raise ValidationError("Invalid webhook signature") from e
        except ValueError as e:
            logger.warning("Invalid webhook payload: %s", e)
            raise ValidationError("Invalid webhook payload") from e

        data = json.loads(payload)
        event = to_billing_event(data)
        if not event.id or not event.type:
            raise ValidationError("Invalid webhook payload")
        return event
