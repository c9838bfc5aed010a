"""
Resend email service adapter.
"""

import asyncio
import html
import logging

import resend

from core.domain.account import Account
from core.interfaces.services import NotificationService
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

_BUTTON_STYLE = (
    "background: #667eea; color: white; padding: 12px 30px; text-decoration: none; "
    "border-radius: 6px; display: inline-block;"
)


def _display_name(first_name: str | None) -> str:
    # Names are user input and end up inside HTML
    return html.escape(first_name) if first_name else "there"


class ResendEmailService(NotificationService):
    """Account notifications sent through the Resend API. Never raises."""

    def __init__(
        self,
        api_key: str | None = None,
        from_email: str | None = None,
        timeout: float | None = None,
    ):
        self._api_key = api_key if api_key is not None else settings.resend_api_key
        if self._api_key:
            resend.api_key = self._api_key
        self._from_email = from_email or settings.resend_from_email
        self._frontend_url = settings.frontend_url
        self._timeout = timeout or settings.email_timeout

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def _send(self, to_email: str, subject: str, html: str, kind: str) -> bool:
        if not self.is_configured:
            logger.info("[DEV] %s email for %s: %s", kind, to_email, subject)
            return True

        params = {
            "from": self._from_email,
            "to": [to_email],
            "subject": subject,
            "html": html,
        }
        try:
            await asyncio.wait_for(asyncio.to_thread(resend.Emails.send, params), timeout=self._timeout)
            logger.info("%s email sent to %s", kind, to_email)
            return True
        except asyncio.TimeoutError:
            logger.error("%s email to %s timed out after %ss", kind, to_email, self._timeout)
            return False
        except Exception as e:
            logger.error("Failed to send %s email to %s: %s", kind, to_email, e)
            return False

    async def send_welcome_email(self, account: Account) -> bool:
        """
        Send the welcome email after registration.

        Args:
            account: The newly registered account

        Returns:
            True if sent successfully, False otherwise
        """
        return await self._send(
            account.email,
            "Welcome to Influencore! 🎉",
            self._get_welcome_email_html(account.first_name),
            "Welcome",
        )

    async def send_upgrade_notification(self, account: Account, plan_name: str) -> bool:
        """Confirm a completed upgrade to a paid plan."""
        return await self._send(
            account.email,
            f"🎉 Welcome to {plan_name} Plan!",
            self._get_upgrade_email_html(account.first_name, plan_name),
            "Upgrade",
        )

    async def send_usage_limit_notification(self, account: Account) -> bool:
        return await self._send(
            account.email,
            "⚠️ Usage Limit Reached",
            self._get_usage_limit_email_html(
                account.first_name,
                account.usage.generations_used,
                account.usage.posts_created,
            ),
            "Usage limit",
        )

    def _wrap(self, header: str, body: str, gradient: str = "#667eea 0%, #764ba2 100%") -> str:
        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <meta name="viewport" content="width=device-width, initial-scale=1.0">
        </head>
        <body style="font-family: Arial, sans-serif;">
            <div style="max-width: 600px; margin: 0 auto;">
                <div style="background: linear-gradient(135deg, {gradient}); padding: 30px; text-align: center; color: white;">
                    {header}
                </div>
                <div style="padding: 30px; background: #f9f9f9;">
                    {body}
                </div>
                <div style="background: #333; padding: 20px; text-align: center; color: white;">
                    <p style="margin: 0; font-size: 14px;">&copy; Influencore. All rights reserved.</p>
                </div>
            </div>
        </body>
        </html>
        """

    def _get_welcome_email_html(self, first_name: str) -> str:
        """Generate welcome email HTML."""
        header = (
            '<h1 style="margin: 0; font-size: 28px;">🎯 Welcome to Influencore!</h1>'
            '<p style="margin: 10px 0 0 0; opacity: 0.9;">Your AI-powered content creation journey starts now</p>'
        )
        body = f"""
            <h2 style="color: #333; margin-top: 0;">Hi {_display_name(first_name)}!</h2>
            <p style="color: #666; line-height: 1.6;">
                Welcome to Influencore! You're now part of a community of creators making
                content with AI-powered tools.
            </p>
            <div style="background: white; padding: 20px; border-radius: 8px; margin: 20px 0;">
                <h3 style="color: #333; margin-top: 0;">🚀 What you can do now:</h3>
                <ul style="color: #666; line-height: 1.8;">
                    <li>Generate viral social media content</li>
                    <li>Create AI-powered videos</li>
                    <li>Access your content library</li>
                    <li>Track your content performance</li>
                </ul>
            </div>
            <div style="text-align: center; margin: 30px 0;">
                <a href="{self._frontend_url}/dashboard" style="{_BUTTON_STYLE}">🎬 Start Creating</a>
            </div>
            <p style="color: #666; font-size: 14px;">
                You're currently on the <strong>Free plan</strong> with {settings.free_generations} free generations.
                Upgrade anytime to unlock more content creation!
            </p>
        """
        return self._wrap(header, body)

    def _get_upgrade_email_html(self, first_name: str, plan_name: str) -> str:
        """Generate upgrade confirmation HTML."""
        header = (
            '<h1 style="margin: 0; font-size: 28px;">🎉 Upgrade Complete!</h1>'
            f'<p style="margin: 10px 0 0 0; opacity: 0.9;">You\'re now on the {plan_name} plan</p>'
        )
        body = f"""
            <h2 style="color: #333; margin-top: 0;">Congratulations {_display_name(first_name)}!</h2>
            <p style="color: #666; line-height: 1.6;">
                Your account has been upgraded to the <strong>{plan_name}</strong> plan.
                Your new generation allowance is available right away.
            </p>
            <div style="text-align: center; margin: 30px 0;">
                <a href="{self._frontend_url}/dashboard" style="{_BUTTON_STYLE}">🚀 Start Creating</a>
            </div>
        """
        return self._wrap(header, body)

    def _get_usage_limit_email_html(self, first_name: str, generations_used: int, posts_created: int) -> str:
        """Generate usage-limit warning HTML."""
        header = '<h1 style="margin: 0; font-size: 28px;">⚠️ Usage Limit Reached</h1>'
        body = f"""
            <h2 style="color: #333; margin-top: 0;">Hi {_display_name(first_name)}!</h2>
            <p style="color: #666; line-height: 1.6;">
                You've reached your current plan's usage limit. To continue creating content,
                consider upgrading to a higher plan.
            </p>
            <div style="background: white; padding: 20px; border-radius: 8px; margin: 20px 0;">
                <h3 style="color: #333; margin-top: 0;">📊 Current Usage:</h3>
                <p style="color: #666; margin: 5px 0;"><strong>AI Generations:</strong> {generations_used}</p>
                <p style="color: #666; margin: 5px 0;"><strong>Posts Created:</strong> {posts_created}</p>
            </div>
            <div style="text-align: center; margin: 30px 0;">
                <a href="{self._frontend_url}/pricing" style="{_BUTTON_STYLE}">💎 Upgrade Now</a>
            </div>
        """
        return self._wrap(header, body, gradient="#ff6b6b 0%, #ee5a24 100%")


# Singleton instance
email_service = ResendEmailService()
