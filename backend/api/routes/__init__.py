"""API Routes."""

from fastapi import APIRouter

from .analytics import router as analytics_router
from .auth import router as auth_router
from .generation import router as generation_router
from .health import router as health_router
from .payments import router as payments_router
from .posts import router as posts_router
from .users import router as users_router
from .webhooks import router as webhooks_router

# Create main API router
api_router = APIRouter()

# Include route modules
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(auth_router)
api_router.include_router(generation_router)
api_router.include_router(payments_router)
api_router.include_router(users_router)
api_router.include_router(posts_router)
api_router.include_router(analytics_router)
api_router.include_router(webhooks_router)
