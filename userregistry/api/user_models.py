"""Request/response models for user endpoints."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CreateUserRequest(BaseModel):
    """Request model for creating a user.

    Fields are optional here so that missing values reach the registry and
    are reported the same way as malformed ones.
    """
    email: Optional[str] = Field(None, description="Email address, unique across users")
    name: Optional[str] = Field(None, description="Display name")


class UserResponse(BaseModel):
    """Response model for a created user."""
    id: str
    email: str
    name: str
    created_at: datetime
