"""Shared schema base - camelCase wire format, ORM-readable."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase on input, emits camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    message: str


def non_blank(v: str) -> str:
    """Reject empty or whitespace-only strings (validator helper)."""
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v
