"""
Content and video generation routes.

Every generation passes the freemium gate; a denial is a 429 carrying
upgradeRequired, remainingFree and plan.
"""

import logging

from fastapi import APIRouter, Depends, Request

from adapters.ai.video_adapter import available_models, model_capabilities
from api.deps import CurrentAccount, get_generation_service
from api.middleware.rate_limit import RATE_LIMITS, limiter
from api.schemas.common import UsageResponse
from api.schemas.generation import (
    GenerateScriptRequest,
    GenerateScriptResponse,
    GenerateTextRequest,
    GenerateTextResponse,
    ImageVideoRequest,
    VideoModelsResponse,
    VideoRequest,
    VideoResponse,
)
from services.generation import GenerationOutcome, GenerationService, VideoKind

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Generation"])


def _meta(outcome: GenerationOutcome) -> dict:
    usage = outcome.account.usage
    return {
        "usage": UsageResponse(
            generations_used=usage.generations_used,
            posts_created=usage.posts_created,
        ),
        "remaining_free": outcome.remaining_free,
        "plan": outcome.plan,
    }


def _video_response(outcome: GenerationOutcome) -> VideoResponse:
    return VideoResponse(
        video=outcome.video.to_dict(),
        video_id=outcome.item.id,
        **_meta(outcome),
    )


@router.post("/generate-text", response_model=GenerateTextResponse)
@limiter.limit(RATE_LIMITS["generation"])
async def generate_text(
    request: Request,
    data: GenerateTextRequest,
    current_account: CurrentAccount,
    service: GenerationService = Depends(get_generation_service),
) -> GenerateTextResponse:
    """Generate post text for a message in the requested mode."""
    outcome = await service.generate_text(current_account, data.message, data.mode, data.platform)
    return GenerateTextResponse(
        content=outcome.item.body,
        post_id=outcome.item.id,
        should_show_upgrade=outcome.should_show_upgrade,
        **_meta(outcome),
    )


@router.post("/generate-video", response_model=GenerateScriptResponse)
@limiter.limit(RATE_LIMITS["generation"])
async def generate_video_script(
    request: Request,
    data: GenerateScriptRequest,
    current_account: CurrentAccount,
    service: GenerationService = Depends(get_generation_service),
) -> GenerateScriptResponse:
    """Generate a short-form video script."""
    outcome = await service.generate_video_script(current_account, data.message, data.mode)
    return GenerateScriptResponse(
        script=outcome.item.body,
        post_id=outcome.item.id,
        should_show_upgrade=outcome.should_show_upgrade,
        **_meta(outcome),
    )


@router.post("/generate-veo3-video", response_model=VideoResponse)
@limiter.limit(RATE_LIMITS["generation"])
async def generate_veo3_video(
    request: Request,
    data: VideoRequest,
    current_account: CurrentAccount,
    service: GenerationService = Depends(get_generation_service),
) -> VideoResponse:
    outcome = await service.generate_video(current_account, VideoKind.VEO3, data.prompt, data.options)
    return _video_response(outcome)


@router.post("/generate-sora-video", response_model=VideoResponse)
@limiter.limit(RATE_LIMITS["generation"])
async def generate_sora_video(
    request: Request,
    data: VideoRequest,
    current_account: CurrentAccount,
    service: GenerationService = Depends(get_generation_service),
) -> VideoResponse:
    outcome = await service.generate_video(current_account, VideoKind.SORA, data.prompt, data.options)
    return _video_response(outcome)


@router.post("/generate-viral-short", response_model=VideoResponse)
@limiter.limit(RATE_LIMITS["generation"])
async def generate_viral_short(
    request: Request,
    data: VideoRequest,
    current_account: CurrentAccount,
    service: GenerationService = Depends(get_generation_service),
) -> VideoResponse:
    outcome = await service.generate_video(current_account, VideoKind.VIRAL_SHORT, data.prompt, data.options)
    return _video_response(outcome)


@router.post("/generate-video-from-image", response_model=VideoResponse)
@limiter.limit(RATE_LIMITS["generation"])
async def generate_video_from_image(
    request: Request,
    data: ImageVideoRequest,
    current_account: CurrentAccount,
    service: GenerationService = Depends(get_generation_service),
) -> VideoResponse:
    outcome = await service.generate_video(
        current_account,
        VideoKind.IMAGE,
        data.prompt,
        data.options,
        image_url=data.image_url,
    )
    return _video_response(outcome)


@router.get("/video-models", response_model=VideoModelsResponse)
async def list_video_models() -> VideoModelsResponse:
    """Static catalog of supported video models."""
    return VideoModelsResponse(models=available_models(), capabilities=model_capabilities())
