"""Unit tests for the Resend notification adapter."""

from unittest.mock import patch

import pytest

from adapters.email.resend_adapter import ResendEmailService
from core.domain.account import Account

pytestmark = pytest.mark.asyncio


@pytest.fixture
def account() -> Account:
    return Account(email="creator@example.com", first_name="Casey", last_name="Creator")


class TestResendEmailService:
    async def test_dev_mode_logs_instead_of_sending(self, account):
        service = ResendEmailService(api_key="")

        with patch("adapters.email.resend_adapter.resend.Emails.send") as send:
            assert await service.send_welcome_email(account) is True

        send.assert_not_called()

    async def test_welcome_email(self, account):
        service = ResendEmailService(api_key="re_test_key", from_email="Influencore <hi@example.com>")

        with patch("adapters.email.resend_adapter.resend.Emails.send") as send:
            assert await service.send_welcome_email(account) is True

        params = send.call_args.args[0]
        assert params["to"] == ["creator@example.com"]
        assert params["from"] == "Influencore <hi@example.com>"
        assert "Welcome" in params["subject"]
        assert "Casey" in params["html"]

    @pytest.mark.parametrize("method", ["send_welcome_email", "send_usage_limit_notification"])
    async def test_name_is_html_escaped(self, method):
        account = Account(email="x@example.com", first_name='<img src=x onerror="alert(1)">', last_name="X")
        service = ResendEmailService(api_key="re_test_key")

        with patch("adapters.email.resend_adapter.resend.Emails.send") as send:
            await getattr(service, method)(account)

        body = send.call_args.args[0]["html"]
        assert "<img" not in body
        assert "&lt;img src=x onerror=&quot;alert(1)&quot;&gt;" in body

    async def test_upgrade_email_escapes_name(self):
        account = Account(email="x@example.com", first_name="<b>Bold</b>", last_name="X")
        service = ResendEmailService(api_key="re_test_key")

        with patch("adapters.email.resend_adapter.resend.Emails.send") as send:
            await service.send_upgrade_notification(account, "Starter")

        assert "&lt;b&gt;Bold&lt;/b&gt;" in send.call_args.args[0]["html"]

    async def test_upgrade_email_names_plan(self, account):
        service = ResendEmailService(api_key="re_test_key")

        with patch("adapters.email.resend_adapter.resend.Emails.send") as send:
            await service.send_upgrade_notification(account, "Professional")

        assert "Professional" in send.call_args.args[0]["subject"]

    async def test_usage_limit_email(self, account):
        service = ResendEmailService(api_key="re_test_key")

        with patch("adapters.email.resend_adapter.resend.Emails.send") as send:
            assert await service.send_usage_limit_notification(account) is True

        assert "Usage Limit" in send.call_args.args[0]["subject"]

    async def test_provider_failure_returns_false(self, account):
        service = ResendEmailService(api_key="re_test_key")

        with patch("adapters.email.resend_adapter.resend.Emails.send", side_effect=RuntimeError("rejected")):
            assert await service.send_welcome_email(account) is False
