"""Payment adapters for billing and subscription management."""

from .stripe_adapter import StripePaymentService, to_billing_event

__all__ = [
    "StripePaymentService",
    "to_billing_event",
]
