"""
Replicate adapter for generative video.

Every vendor failure degrades to a clearly labeled fallback video instead of
failing the request.
"""

import asyncio
import logging
from typing import Any

import replicate

from core.interfaces.services import VideoResult, VideoService
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

FALLBACK_NOTE = "This is a demo video. Connect real AI APIs for actual generation."

# Model catalog exposed through /api/video-models
VIDEO_MODELS = {
    "veo3": "google/veo-3",
    "sora": "openai/sora",
    "pika": "pika-labs/pika",
    "runway": "runwayml/stable-diffusion-v1-5",
    "svd": "stability-ai/stable-video-diffusion",
    "animatediff": "guoyww/animatediff",
    "zeroscope": "cjwbw/zeroscope-v2-xl",
    "modelScope": "damo-vilab/text-to-video-synthesis",
}

MODEL_CAPABILITIES = {
    "veo3": {
        "name": "Google Veo 3 Style",
        "capabilities": ["Text-to-video", "Image-to-video", "High quality", "Cinematic"],
        "maxDuration": 20,
        "resolutions": ["1920x1080", "1280x720", "3840x2160"],
    },
    "sora": {
        "name": "Sora Level",
        "capabilities": ["Photorealistic", "Complex scenes", "Ultra high quality", "Long duration"],
        "maxDuration": 60,
        "resolutions": ["1920x1080", "3840x2160"],
    },
    "pika": {
        "name": "Pika Labs",
        "capabilities": ["Audio sync", "Creative styles", "Fast generation"],
        "maxDuration": 15,
        "resolutions": ["1024x1024", "1920x1080"],
    },
    "animatediff": {
        "name": "AnimateDiff",
        "capabilities": ["Anime style", "Smooth animation", "Creative"],
        "maxDuration": 12,
        "resolutions": ["1024x1024", "512x512"],
    },
    "zeroscope": {
        "name": "Zeroscope",
        "capabilities": ["Viral content", "Trending styles", "Mobile optimized"],
        "maxDuration": 15,
        "resolutions": ["1080x1920", "1920x1080"],
    },
}

VEO3_DEFAULTS = {
    "duration": 10,
    "fps": 24,
    "resolution": "1920x1080",
    "style": "cinematic",
    "quality": "high",
}

SORA_DEFAULTS = {
    "duration": 15,
    "fps": 30,
    "resolution": "1920x1080",
    "style": "photorealistic",
    "quality": "ultra-high",
}

IMAGE_TO_VIDEO_DEFAULTS = {
    "duration": 8,
    "fps": 24,
    "resolution": "1920x1080",
    "motion": "smooth",
    "style": "cinematic",
}

# Vertical for mobile feeds
VIRAL_SHORT_DEFAULTS = {
    "duration": 15,
    "fps": 30,
    "resolution": "1080x1920",
    "style": "trending",
    "quality": "high",
}


def available_models() -> list[str]:
    return list(VIDEO_MODELS)


def model_capabilities() -> dict[str, dict[str, Any]]:
    return MODEL_CAPABILITIES


def _merge(defaults: dict[str, Any], options: dict[str, Any] | None) -> dict[str, Any]:
    config = dict(defaults)
    for key, value in (options or {}).items():
        if value is not None:
            config[key] = value
    return config


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _extract_url(output: Any) -> str:
    # Replicate models return a URL string, a list of URLs, or a FileOutput
    if isinstance(output, list):
        output = output[0] if output else None
    if not output:
        return ""
    if hasattr(output, "url"):
        url = output.url
        return url() if callable(url) else str(url)
    return str(output)


class ReplicateVideoService(VideoService):
    """Generative video through Replicate, with a fallback artifact on failure."""

    def __init__(self, api_token: str | None = None, timeout: float | None = None):
        token = api_token if api_token is not None else settings.replicate_api_token
        self._timeout = timeout or settings.replicate_timeout
        if not token:
            logger.warning("REPLICATE_API_TOKEN not set, video generation will use fallback mode")
            self._client = None
        else:
            self._client = replicate.Client(api_token=token)
            logger.info("Replicate video client initialized")

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def generate_veo3_video(self, prompt: str, options: dict | None = None) -> VideoResult:
        """Cinematic text-to-video."""
        config = _merge(VEO3_DEFAULTS, options)
        return await self._generate("veo3", settings.replicate_model_veo3, prompt, config)

    async def generate_sora_video(self, prompt: str, options: dict | None = None) -> VideoResult:
        """Photorealistic text-to-video."""
        config = _merge(SORA_DEFAULTS, options)
        return await self._generate("sora", settings.replicate_model_sora, prompt, config)

    async def generate_viral_short(self, prompt: str, options: dict | None = None) -> VideoResult:
        """Vertical short for TikTok / Reels."""
        config = _merge(VIRAL_SHORT_DEFAULTS, options)
        return await self._generate("zeroscope", settings.replicate_model_viral_short, prompt, config)

    async def generate_video_from_image(
        self, image_url: str, prompt: str, options: dict | None = None
    ) -> VideoResult:
        """Animate a still image."""
        config = _merge(IMAGE_TO_VIDEO_DEFAULTS, options)
        return await self._generate(
            "svd",
            settings.replicate_model_image_to_video,
            prompt,
            config,
            extra_input={"image": image_url},
        )

    async def _generate(
        self,
        model_key: str,
        model_ref: str,
        prompt: str,
        config: dict[str, Any],
        extra_input: dict[str, Any] | None = None,
    ) -> VideoResult:
        if self._client is None:
            return self._fallback(prompt, config)

        input_params = {**config, **(extra_input or {}), "prompt": prompt}
        try:
            output = await asyncio.wait_for(
                asyncio.to_thread(self._client.run, model_ref, input=input_params),
                timeout=self._timeout,
            )
            video_url = _extract_url(output)
        except asyncio.TimeoutError:
            logger.error("Replicate %s generation timed out after %ss", model_key, self._timeout)
            return self._fallback(prompt, config)
        except Exception as e:
            logger.error("Replicate %s generation failed: %s", model_key, e, exc_info=True)
            return self._fallback(prompt, config)

        if not video_url:
            logger.error("Replicate %s returned no output", model_key)
            return self._fallback(prompt, config)

        logger.info("Generated %s video: %s", model_key, video_url)
        return VideoResult(
            video_url=video_url,
            model=model_key,
            prompt=prompt,
            duration=_as_int(config.get("duration"), 10),
            resolution=str(config.get("resolution", "1920x1080")),
            options=config,
        )

    @staticmethod
    def _fallback(prompt: str, config: dict[str, Any]) -> VideoResult:
        logger.info("Using fallback video for prompt")
        return VideoResult(
            video_url=settings.fallback_video_url,
            model="fallback",
            prompt=prompt,
            duration=_as_int(config.get("duration"), 10),
            resolution=str(config.get("resolution", "1920x1080")),
            is_fallback=True,
            note=FALLBACK_NOTE,
            options=config,
        )
