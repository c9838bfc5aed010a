"""Integration tests for pricing and checkout endpoints."""

from unittest.mock import MagicMock, patch

import pytest
import stripe
from httpx import AsyncClient

from infrastructure.database.models import AccountModel

pytestmark = pytest.mark.asyncio


class TestPricing:
    async def test_list_plans(self, async_client: AsyncClient):
        response = await async_client.get("/api/payments/plans")

        assert response.status_code == 200
        data = response.json()
        assert data["freeGenerations"] == 2
        plans = {plan["id"]: plan for plan in data["plans"]}
        assert set(plans) == {"free", "starter", "professional", "enterprise"}
        assert plans["starter"]["priceMonthly"] == 19
        assert plans["enterprise"]["generationQuota"] is None


class TestCheckout:
    async def test_create_checkout_session(
        self, async_client: AsyncClient, auth_headers: dict, test_account: AccountModel
    ):
        with patch("adapters.payments.stripe_adapter.stripe.checkout.Session.create") as create:
            create.return_value = MagicMock(id="cs_test_abc", url="https://checkout.stripe.com/c/pay/cs_test_abc")

            response = await async_client.post(
                "/api/payments/create-checkout-session",
                json={"plan": "Starter", "billingCycle": "monthly"},
                headers=auth_headers,
            )

        assert response.status_code == 200
        assert response.json() == {
            "sessionId": "cs_test_abc",
            "url": "https://checkout.stripe.com/c/pay/cs_test_abc",
        }
        assert create.call_args.kwargs["metadata"]["userId"] == test_account.id
        assert create.call_args.kwargs["metadata"]["plan"] == "starter"

    async def test_free_plan_rejected(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/payments/create-checkout-session",
            json={"plan": "free"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid plan"

    async def test_unknown_billing_cycle_rejected(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.post(
            "/api/payments/create-checkout-session",
            json={"plan": "starter", "billingCycle": "weekly"},
            headers=auth_headers,
        )

        assert response.status_code == 400

    async def test_requires_auth(self, async_client: AsyncClient):
        response = await async_client.post("/api/payments/create-checkout-session", json={"plan": "starter"})

        assert response.status_code == 401

    async def test_stripe_failure(self, async_client: AsyncClient, auth_headers: dict):
        with patch("adapters.payments.stripe_adapter.stripe.checkout.Session.create") as create:
            create.side_effect = stripe.StripeError("boom")

            response = await async_client.post(
                "/api/payments/create-checkout-session",
                json={"plan": "professional", "billingCycle": "yearly"},
                headers=auth_headers,
            )

        assert response.status_code == 502
