"""
Analytics response schemas.
"""

from .common import CamelModel, UsageResponse


class AnalyticsResponse(CamelModel):
    """Aggregate counts over an account's content library."""

    total_posts: int
    posts_by_platform: dict[str, int]
    posts_by_type: dict[str, int]
    usage: UsageResponse
    plan: str
    subscription_status: str
    remaining_free: int | None = None
