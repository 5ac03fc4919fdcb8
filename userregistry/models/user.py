"""User data model for userregistry."""

from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as the same instant in UTC.

    Naive values are taken to already be UTC (SQLite drops tzinfo on read).
    """
    if value is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class User(BaseModel):
    """A registered user.

    Instances are immutable once created; the registry never updates them.
    """

    id: str = Field(..., description="Opaque unique user identifier")
    email: str = Field(..., description="User email address (unique, compared as given)")
    name: str = Field(..., description="User display name")
    created_at: datetime = Field(..., description="User creation timestamp (UTC)")

    model_config = ConfigDict(frozen=True)
