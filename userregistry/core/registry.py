"""User registry: the single entry point for creating users.

The registry validates input, checks for an existing user with the same email
and inserts the new record. The lookup is only a fast path. Two concurrent
creates can both miss it, so the store must also enforce email uniqueness
and report a rejected insert as ``EmailConstraintViolation``, which is
translated here into ``DuplicateEmail``.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol

from userregistry.core.errors import DuplicateEmail, EmailConstraintViolation, InvalidInput
from userregistry.core.validation import validate_email_address, validate_name
from userregistry.logging_config import mask_email
from userregistry.models.user import User, as_utc

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    """Persistence operations the registry depends on."""

    def find_by_email(self, email: str) -> Optional[User]:
        ...

    def insert(self, user: User) -> User:
        ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_user_id() -> str:
    return str(uuid.uuid4())


class UserRegistry:
    """Creates users while guaranteeing that no two share an email."""

    def __init__(
        self,
        store: UserStore,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_user_id,
    ):
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    def create_user(self, email: str, name: str) -> User:
        """Create and persist a new user.

        Args:
            email: Email address, unique across all users (case-sensitive)
            name: Display name

        Returns:
            The persisted User, including its assigned id and created_at

        Raises:
            InvalidInput: If email or name is missing or malformed
            DuplicateEmail: If a user with this email already exists
            StoreUnavailable: If the store failed for infrastructure reasons
        """
        try:
            validate_email_address(email)
            validate_name(name)
        except InvalidInput as e:
            logger.warning(f"Rejected user creation: invalid {e.field}")
            raise

        if self.store.find_by_email(email) is not None:
            logger.warning(f"Rejected user creation: email already registered ({mask_email(email)})")
            raise DuplicateEmail(email)

        # created_at is always stored and returned in UTC.
        user = User(id=self.id_factory(), email=email, name=name, created_at=as_utc(self.clock()))
        try:
            created = self.store.insert(user)
        except EmailConstraintViolation as e:
            # Lost a race with a concurrent create for the same email.
            logger.warning(f"Rejected user creation: unique constraint on email ({mask_email(email)})")
            raise DuplicateEmail(email) from e

        logger.info(f"Created user {created.id}")
        return created
