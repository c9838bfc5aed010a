"""
Generation service.

Runs every generation through the same pipeline: freemium gate, usage
reservation, content production, persistence of the content item.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Awaitable, Callable

from core.domain.account import Account
from core.domain.content import MODE_PLATFORMS, ContentItem, ContentMode, ContentType
from core.exceptions import InternalError, QuotaExceededError, ValidationError
from core.interfaces.repositories import UnitOfWork
from core.interfaces.services import NotificationService, VideoResult, VideoService
from core.plans import FREE_PLAN, get_plan
from services.freemium_gate import GateResult, evaluate, remaining_free
from services.template_selector import normalize_mode, select_content, select_video_script
from services.usage_ledger import UsageLedger

logger = logging.getLogger(__name__)


class VideoKind(StrEnum):
    VEO3 = "veo3"
    SORA = "sora"
    VIRAL_SHORT = "viral-short"
    IMAGE = "image-to-video"


# Where each video kind is usually posted
VIDEO_PLATFORMS = {
    VideoKind.VEO3: "YouTube",
    VideoKind.SORA: "YouTube",
    VideoKind.VIRAL_SHORT: "TikTok",
    VideoKind.IMAGE: "Instagram",
}


@dataclass
class GenerationOutcome:
    """A delivered generation plus the usage state after it."""

    item: ContentItem
    account: Account
    remaining_free: int | None
    should_show_upgrade: bool
    video: VideoResult | None = None

    @property
    def plan(self) -> str:
        return self.account.plan


def _title_from(message: str, limit: int = 60) -> str:
    text = " ".join(message.split())
    return text if len(text) <= limit else text[: limit - 3].rstrip() + "..."


class GenerationService:
    """Gate-checked content and video generation for one account."""

    def __init__(
        self,
        uow: UnitOfWork,
        video_service: VideoService | None = None,
        notifier: NotificationService | None = None,
    ):
        self.uow = uow
        self.ledger = UsageLedger(uow)
        self.video_service = video_service
        self.notifier = notifier

    async def generate_text(
        self,
        account: Account,
        message: str,
        mode: str | None = None,
        platform: str | None = None,
    ) -> GenerationOutcome:
        """Produce post text for a message using the template selector."""
        message = self._require_text(message, "Message is required")
        resolved = normalize_mode(mode)
        content_type = ContentType.SCRIPT if resolved in (ContentMode.VIDEO, ContentMode.CLIP) else ContentType.TEXT

        async def produce() -> ContentItem:
            return ContentItem(
                account_id=account.id,
                title=_title_from(message),
                body=select_content(message, resolved),
                platform=platform or MODE_PLATFORMS[resolved],
                content_type=content_type,
                mode=resolved.value,
                metadata={"prompt": message},
            )

        return await self._run(account, produce)

    async def generate_video_script(self, account: Account, message: str, mode: str | None = None) -> GenerationOutcome:
        """Produce a short-form video script for a message."""
        message = self._require_text(message, "Message is required")
        resolved = normalize_mode(mode)

        async def produce() -> ContentItem:
            return ContentItem(
                account_id=account.id,
                title=_title_from(message),
                body=select_video_script(message, resolved),
                platform=MODE_PLATFORMS[resolved],
                content_type=ContentType.SCRIPT,
                mode=resolved.value,
                metadata={"prompt": message},
            )

        return await self._run(account, produce)

    async def generate_video(
        self,
        account: Account,
        kind: VideoKind,
        prompt: str,
        options: dict[str, Any] | None = None,
        image_url: str | None = None,
    ) -> GenerationOutcome:
        """Produce a video through the configured video service."""
        prompt = self._require_text(prompt, "Prompt is required")
        if kind == VideoKind.IMAGE and not (image_url or "").strip():
            raise ValidationError("Image URL and prompt are required")
        if self.video_service is None:
            raise InternalError("Video generation is not configured")

        produced: dict[str, VideoResult] = {}

        async def produce() -> ContentItem:
            video = await self._call_video_service(kind, prompt, options or {}, image_url)
            produced["video"] = video
            metadata = {
                "prompt": prompt,
                "model": video.model,
                "videoUrl": video.video_url,
                "duration": video.duration,
                "resolution": video.resolution,
                "isFallback": video.is_fallback,
            }
            if image_url:
                metadata["imageUrl"] = image_url
            return ContentItem(
                account_id=account.id,
                title=_title_from(prompt),
                body=video.video_url,
                platform=VIDEO_PLATFORMS[kind],
                content_type=ContentType.VIDEO,
                mode=kind.value,
                metadata=metadata,
            )

        outcome = await self._run(account, produce)
        outcome.video = produced.get("video")
        return outcome

    async def _call_video_service(
        self,
        kind: VideoKind,
        prompt: str,
        options: dict[str, Any],
        image_url: str | None,
    ) -> VideoResult:
        if kind == VideoKind.VEO3:
            return await self.video_service.generate_veo3_video(prompt, options)
        if kind == VideoKind.SORA:
            return await self.video_service.generate_sora_video(prompt, options)
        if kind == VideoKind.VIRAL_SHORT:
            return await self.video_service.generate_viral_short(prompt, options)
        return await self.video_service.generate_video_from_image(image_url, prompt, options)

    @staticmethod
    def _require_text(value: str | None, message: str) -> str:
        if value is None or not str(value).strip():
            raise ValidationError(message)
        return str(value).strip()

    async def _run(
        self,
        account: Account,
        produce: Callable[[], Awaitable[ContentItem]],
    ) -> GenerationOutcome:
        gate = evaluate(account.plan, account.usage)
        if not gate.allowed:
            logger.info("Generation denied for account %s: %s", account.id, gate.decision)
            raise gate.to_error()

        if not await self.ledger.reserve(account):
            # Another request took the last slot since the account was loaded
            raise await self._denial(account)

        try:
            item = await produce()
            item = await self.uow.contents.create(item)
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            await self.ledger.release(account.id)
            logger.exception("Generation failed for account %s; reservation released", account.id)
            raise

        current = await self.uow.accounts.get_by_id(account.id) or account
        used = current.usage.generations_used
        left = remaining_free(current.plan, used)

        logger.info(
            "Generation delivered for account %s (plan=%s, used=%d, item=%s)",
            current.id,
            current.plan,
            used,
            item.id,
        )

        if left == 0 and get_plan(current.plan).name == FREE_PLAN and self.notifier is not None:
            await self.notifier.send_usage_limit_notification(current)

        return GenerationOutcome(
            item=item,
            account=current,
            remaining_free=left,
            should_show_upgrade=gate.should_show_upgrade,
        )

    async def _denial(self, account: Account) -> QuotaExceededError:
        fresh = await self.uow.accounts.get_by_id(account.id) or account
        result: GateResult = evaluate(fresh.plan, fresh.usage)
        logger.info("Generation reservation lost race for account %s: %s", account.id, result.decision)
        return result.to_error()
