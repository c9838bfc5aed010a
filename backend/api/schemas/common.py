"""
Shared schema building blocks.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input; serialises with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UsageResponse(CamelModel):
    """Usage counters for an account."""

    generations_used: int = 0
    posts_created: int = 0
