"""
Authentication request and response schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from core.domain.account import Account

from .common import CamelModel, UsageResponse

MIN_PASSWORD_LENGTH = 6


class LoginRequest(CamelModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    """Registration request schema."""

    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: EmailStr
    password: str = Field(..., max_length=100)
    company: Optional[str] = Field(default=None, max_length=255)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("All fields are required")
        return v

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        return v


class AccountResponse(CamelModel):
    """Public view of an account."""

    id: str
    email: str
    first_name: str
    last_name: str
    company: Optional[str] = None
    plan: str
    subscription_status: str
    billing_cycle: Optional[str] = None
    usage: UsageResponse
    created_at: Optional[datetime] = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            company=account.company,
            plan=account.plan,
            subscription_status=account.subscription_status.value,
            billing_cycle=account.billing_cycle,
            usage=UsageResponse(
                generations_used=account.usage.generations_used,
                posts_created=account.usage.posts_created,
            ),
            created_at=account.created_at,
        )


class AuthResponse(CamelModel):
    """Token plus the authenticated account."""

    success: bool = True
    token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until the token expires
    user: AccountResponse
