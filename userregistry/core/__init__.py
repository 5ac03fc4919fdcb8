"""User registration core for userregistry."""

from userregistry.core.errors import (
    UserRegistryError,
    InvalidInput,
    DuplicateEmail,
    StoreUnavailable,
    EmailConstraintViolation,
)
from userregistry.core.registry import UserRegistry, UserStore
from userregistry.core.validation import validate_email_address, validate_name

__all__ = [
    "UserRegistryError",
    "InvalidInput",
    "DuplicateEmail",
    "StoreUnavailable",
    "EmailConstraintViolation",
    "UserRegistry",
    "UserStore",
    "validate_email_address",
    "validate_name",
]
