"""Integration tests for the Stripe webhook endpoint."""

from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from infrastructure.database.models import AccountModel, ProcessedWebhookEvent

pytestmark = pytest.mark.asyncio

WEBHOOK_URL = "/api/webhooks/stripe"


async def _post_signed(async_client: AsyncClient, payload: str, sign_payload) -> object:
    return await async_client.post(
        WEBHOOK_URL,
        content=payload,
        headers={"Stripe-Signature": sign_payload(payload), "Content-Type": "application/json"},
    )


async def _reload(db_session, account: AccountModel) -> AccountModel:
    await db_session.refresh(account)
    return account


class TestCheckoutWebhook:
    async def test_checkout_upgrades_account(
        self, async_client, db_session, test_account, checkout_completed_payload, sign_payload, notifier
    ):
        response = await _post_signed(async_client, checkout_completed_payload, sign_payload)

        assert response.status_code == 200
        assert response.json() == {"received": True, "duplicate": False}

        account = await _reload(db_session, test_account)
        assert account.plan == "starter"
        assert account.subscription_status == "active"
        assert account.stripe_customer_id == "cus_new_456"
        assert account.stripe_subscription_id == "sub_new_456"
        assert notifier.of_kind("upgrade") == [("upgrade", "test@example.com", "Starter")]

    async def test_redelivery_is_acknowledged_once(
        self, async_client, db_session, test_account, checkout_completed_payload, sign_payload, notifier
    ):
        first = await _post_signed(async_client, checkout_completed_payload, sign_payload)
        second = await _post_signed(async_client, checkout_completed_payload, sign_payload)

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["duplicate"] is True
        assert len(notifier.of_kind("upgrade")) == 1

        count = (
            await db_session.execute(
                select(func.count()).select_from(ProcessedWebhookEvent).where(
                    ProcessedWebhookEvent.event_id == "evt_checkout_1"
                )
            )
        ).scalar_one()
        assert count == 1

    async def test_upgraded_account_can_generate_past_free_limit(
        self, async_client, db_session, exhausted_account, exhausted_headers, make_stripe_event, sign_payload
    ):
        payload = make_stripe_event(
            "checkout.session.completed",
            {
                "customer": "cus_up",
                "subscription": "sub_up",
                "metadata": {"userId": exhausted_account.id, "plan": "professional", "billingCycle": "monthly"},
            },
        )
        assert (await _post_signed(async_client, payload, sign_payload)).status_code == 200

        response = await async_client.post(
            "/api/generate-text", json={"message": "back in business"}, headers=exhausted_headers
        )

        assert response.status_code == 200
        assert response.json()["plan"] == "professional"


class TestSubscriptionWebhooks:
    async def test_payment_failed_marks_past_due(
        self, async_client, db_session, subscribed_account, make_stripe_event, sign_payload
    ):
        payload = make_stripe_event(
            "invoice.payment_failed",
            {"id": "in_1", "customer": "cus_test_123", "subscription": "sub_test_123"},
        )

        response = await _post_signed(async_client, payload, sign_payload)

        assert response.status_code == 200
        account = await _reload(db_session, subscribed_account)
        assert account.subscription_status == "past_due"
        assert account.plan == "professional"

    async def test_subscription_deleted_downgrades(
        self, async_client, db_session, subscribed_account, make_stripe_event, sign_payload
    ):
        payload = make_stripe_event(
            "customer.subscription.deleted",
            {"id": "sub_test_123", "customer": "cus_test_123", "status": "canceled"},
        )

        response = await _post_signed(async_client, payload, sign_payload)

        assert response.status_code == 200
        account = await _reload(db_session, subscribed_account)
        assert account.subscription_status == "canceled"
        assert account.plan == "free"

    async def test_out_of_order_delete_ignored(
        self, async_client, db_session, subscribed_account, make_stripe_event, sign_payload
    ):
        now = datetime.now(UTC)
        newer = make_stripe_event(
            "invoice.payment_failed",
            {"customer": "cus_test_123", "subscription": "sub_test_123"},
            created=int(now.timestamp()),
        )
        older = make_stripe_event(
            "customer.subscription.deleted",
            {"id": "sub_test_123", "customer": "cus_test_123", "status": "canceled"},
            created=int((now - timedelta(hours=1)).timestamp()),
        )

        assert (await _post_signed(async_client, newer, sign_payload)).status_code == 200
        assert (await _post_signed(async_client, older, sign_payload)).status_code == 200

        account = await _reload(db_session, subscribed_account)
        assert account.subscription_status == "past_due"

    async def test_unknown_event_type_acknowledged(self, async_client, make_stripe_event, sign_payload):
        payload = make_stripe_event("customer.created", {"id": "cus_x"})

        response = await _post_signed(async_client, payload, sign_payload)

        assert response.status_code == 200
        assert response.json()["duplicate"] is False


class TestWebhookSecurity:
    async def test_bad_signature(self, async_client, checkout_completed_payload, sign_payload, db_session, test_account):
        response = await async_client.post(
            WEBHOOK_URL,
            content=checkout_completed_payload,
            headers={"Stripe-Signature": sign_payload(checkout_completed_payload, "whsec_wrong")},
        )

        assert response.status_code == 400
        account = await _reload(db_session, test_account)
        assert account.plan == "free"

    async def test_missing_signature(self, async_client, checkout_completed_payload):
        response = await async_client.post(WEBHOOK_URL, content=checkout_completed_payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing stripe-signature header"

    async def test_unconfigured_secret(self, async_client, checkout_completed_payload, sign_payload):
        from adapters.payments.stripe_adapter import StripePaymentService
        from api.deps import get_payment_service
        from main import app

        app.dependency_overrides[get_payment_service] = lambda: StripePaymentService(webhook_secret="")

        response = await _post_signed(async_client, checkout_completed_payload, sign_payload)

        assert response.status_code == 403
