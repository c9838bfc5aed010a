"""
Application error taxonomy.

Every error raised across a service or adapter boundary derives from
InfluencoreError. The HTTP layer renders them through a single exception
handler (see main.py), so routes never build error responses by hand.
"""

from typing import Any


class InfluencoreError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, **extra: Any):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_response(self) -> dict[str, Any]:
        return {"detail": self.message, **self.extra}


class ValidationError(InfluencoreError):
    """Missing or malformed request fields."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(ValidationError):
    """Request conflicts with existing state (e.g. duplicate email)."""

    status_code = 409
    default_message = "Resource already exists"


class AuthError(InfluencoreError):
    """Missing credentials or unknown account."""

    status_code = 401
    default_message = "Access token required"


class InvalidTokenError(AuthError):
    """Token present but invalid or expired."""

    status_code = 403
    default_message = "Invalid token"


class NotFoundError(InfluencoreError):
    status_code = 404
    default_message = "Not found"


class QuotaExceededError(InfluencoreError):
    """Freemium gate denied the request."""

    status_code = 429
    default_message = "Usage limit exceeded. Please upgrade your plan."

    def __init__(
        self,
        message: str | None = None,
        *,
        upgrade_required: bool = True,
        remaining_free: int | None = 0,
        plan: str | None = None,
    ):
        super().__init__(
            message,
            upgradeRequired=upgrade_required,
            remainingFree=remaining_free,
            plan=plan,
        )
        self.upgrade_required = upgrade_required
        self.remaining_free = remaining_free
        self.plan = plan


class UpstreamProviderError(InfluencoreError):
    """A payment, email or AI vendor call failed."""

    status_code = 502
    default_message = "Upstream provider unavailable"

    def __init__(self, message: str | None = None, *, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class InternalError(InfluencoreError):
    status_code = 500
    default_message = "Internal server error"


class DuplicateEventError(ConflictError):
    """A billing event id was already recorded by a concurrent delivery."""

    default_message = "Event already processed"


class WebhookNotConfiguredError(InfluencoreError):
    """Webhook received while no signing secret is configured."""

    status_code = 403
    default_message = "Webhook endpoint is not configured"
