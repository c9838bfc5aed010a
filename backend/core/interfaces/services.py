"""Service interfaces for external integrations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ..domain.account import Account
from ..domain.subscription import BillingEvent


@dataclass
class VideoResult:
    """Result of a video generation request."""

    video_url: str
    model: str
    prompt: str
    duration: int
    resolution: str
    is_fallback: bool = False
    note: str | None = None
    options: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = {
            "success": True,
            "videoUrl": self.video_url,
            "model": self.model,
            "prompt": self.prompt,
            "duration": self.duration,
            "resolution": self.resolution,
            "isFallback": self.is_fallback,
        }
        if self.note:
            data["note"] = self.note
        return data


@dataclass
class CheckoutSession:
    """A hosted checkout session created at the payment provider."""

    session_id: str
    url: str | None = None


class VideoService(ABC):
    """Abstract service for generative video."""

    @abstractmethod
    async def generate_veo3_video(self, prompt: str, options: dict | None = None) -> VideoResult:
        ...

    @abstractmethod
    async def generate_sora_video(self, prompt: str, options: dict | None = None) -> VideoResult:
        ...

    @abstractmethod
    async def generate_viral_short(self, prompt: str, options: dict | None = None) -> VideoResult:
        ...

    @abstractmethod
    async def generate_video_from_image(
        self, image_url: str, prompt: str, options: dict | None = None
    ) -> VideoResult:
        ...


class NotificationService(ABC):
    """Fire-and-forget account notifications. Implementations never raise."""

    @abstractmethod
    async def send_welcome_email(self, account: Account) -> bool:
        ...

    @abstractmethod
    async def send_upgrade_notification(self, account: Account, plan_name: str) -> bool:
        ...

    @abstractmethod
    async def send_usage_limit_notification(self, account: Account) -> bool:
        ...


class PaymentService(ABC):
    """Abstract service for payment processing."""

    @abstractmethod
    async def create_checkout_session(
        self,
        account: Account,
        plan_name: str,
        billing_cycle: str,
    ) -> CheckoutSession:
        """Create a subscription checkout session for the account."""
        ...

    @abstractmethod
    def parse_webhook(self, payload: bytes, signature: str | None) -> BillingEvent:
        """Verify the webhook signature and normalise the event."""
        ...
