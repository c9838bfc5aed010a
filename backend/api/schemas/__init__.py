"""
API request and response schemas.
"""

from .analytics import AnalyticsResponse
from .auth import AccountResponse, AuthResponse, LoginRequest, RegisterRequest
from .billing import CheckoutRequest, CheckoutResponse, PlanInfo, PricingResponse, WebhookAck
from .common import CamelModel, UsageResponse
from .content import DeleteResponse, PostListResponse, PostResponse
from .generation import (
    GenerateScriptRequest,
    GenerateScriptResponse,
    GenerateTextRequest,
    GenerateTextResponse,
    ImageVideoRequest,
    VideoModelsResponse,
    VideoRequest,
    VideoResponse,
)
from .user import ProfileUpdateRequest

__all__ = [
    "CamelModel",
    "UsageResponse",
    "LoginRequest",
    "RegisterRequest",
    "AccountResponse",
    "AuthResponse",
    "ProfileUpdateRequest",
    "GenerateTextRequest",
    "GenerateTextResponse",
    "GenerateScriptRequest",
    "GenerateScriptResponse",
    "VideoRequest",
    "ImageVideoRequest",
    "VideoResponse",
    "VideoModelsResponse",
    "PlanInfo",
    "PricingResponse",
    "CheckoutRequest",
    "CheckoutResponse",
    "WebhookAck",
    "PostResponse",
    "PostListResponse",
    "DeleteResponse",
    "AnalyticsResponse",
]
