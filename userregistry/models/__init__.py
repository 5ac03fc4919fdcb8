"""Data models for userregistry."""

from userregistry.models.user import User, as_utc
from userregistry.models.constants import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, USER_ID_LENGTH

__all__ = [
    "User",
    "as_utc",
    "EMAIL_MAX_LENGTH",
    "NAME_MAX_LENGTH",
    "USER_ID_LENGTH",
]
