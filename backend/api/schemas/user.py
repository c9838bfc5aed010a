"""
Account profile schemas.
"""

from typing import Optional

from pydantic import Field, field_validator

from .common import CamelModel


class ProfileUpdateRequest(CamelModel):
    """Profile update; omitted fields are left unchanged."""

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    company: Optional[str] = Field(default=None, max_length=255)

    @field_validator("first_name", "last_name")
    @classmethod
    def reject_blank_names(cls, v: Optional[str]) -> Optional[str]:
        # Only runs for fields present in the body, so None here is an explicit null
        if v is None:
            raise ValueError("Name cannot be empty")
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        return v
