"""
Content and video generation schemas.
"""

from typing import Any, Optional

from pydantic import Field

from .common import CamelModel, UsageResponse


class GenerateTextRequest(CamelModel):
    """Text generation request."""

    message: str = Field(..., max_length=2000)
    mode: str = "chat"
    platform: Optional[str] = Field(default=None, max_length=50)


class GenerateScriptRequest(CamelModel):
    message: str = Field(..., max_length=2000)
    mode: str = "chat"


class VideoRequest(CamelModel):
    """Text-to-video request; options override the model defaults."""

    prompt: str = Field(..., max_length=2000)
    options: dict[str, Any] = Field(default_factory=dict)


class ImageVideoRequest(CamelModel):
    image_url: str = Field(..., max_length=2000)
    prompt: str = Field(..., max_length=2000)
    options: dict[str, Any] = Field(default_factory=dict)


class GenerationMeta(CamelModel):
    """Usage state after a delivered generation."""

    usage: UsageResponse
    remaining_free: Optional[int] = None
    plan: str


class GenerateTextResponse(GenerationMeta):
    success: bool = True
    content: str
    post_id: str
    should_show_upgrade: bool = False


class GenerateScriptResponse(GenerationMeta):
    success: bool = True
    script: str
    post_id: str
    should_show_upgrade: bool = False


class VideoResponse(GenerationMeta):
    success: bool = True
    video: dict[str, Any]
    video_id: str


class VideoModelsResponse(CamelModel):
    success: bool = True
    models: list[str]
    capabilities: dict[str, Any]
