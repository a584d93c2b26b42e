"""Authentication schemas."""

from pydantic import BaseModel, Field


class AuthPrincipal(BaseModel):
    """Authenticated user on whose behalf a mindmap operation runs."""

    user_id: str = Field(min_length=1)
