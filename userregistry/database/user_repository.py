"""Repository for User database operations."""

import logging
from typing import Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from userregistry.core.errors import EmailConstraintViolation, StoreUnavailable
from userregistry.database.models import UserDB, EMAIL_UNIQUE_CONSTRAINT
from userregistry.models.user import User

logger = logging.getLogger(__name__)


def is_email_conflict(error: IntegrityError) -> bool:
    """Return True if an IntegrityError came from the unique email constraint.

    SQLite reports the column ("UNIQUE constraint failed: users.email"),
    Postgres reports the constraint name. Other failures on the email column
    (e.g. NOT NULL) do not count.
    """
    message = str(error.orig).lower()
    if EMAIL_UNIQUE_CONSTRAINT in message:
        return True
    return "unique" in message and "users.email" in message


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        try:
            user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load user {user_id}: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Failed to read users") from e
        return user_db.to_pydantic() if user_db else None

    def find_by_email(self, email: str) -> Optional[User]:
        """Get user by exact email match."""
        try:
            user_db = self.db.query(UserDB).filter(UserDB.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up user by email: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Failed to read users") from e
        return user_db.to_pydantic() if user_db else None

    def count(self) -> int:
        """Return the total number of users."""
        try:
            return self.db.query(func.count(UserDB.id)).scalar()
        except SQLAlchemyError as e:
            logger.error(f"Failed to count users: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Failed to read users") from e

    def insert(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: User object to insert

        Returns:
            The persisted User object

        Raises:
            EmailConstraintViolation: If the unique email constraint rejected the row
            StoreUnavailable: For any other database failure
        """
        try:
            user_db = UserDB.from_pydantic(user)
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Created user {user.id}")
            return user_db.to_pydantic()
        except IntegrityError as e:
            self.db.rollback()
            if is_email_conflict(e):
                logger.debug(f"Unique email constraint rejected user {user.id}")
                raise EmailConstraintViolation(user.email) from e
            logger.error(f"Failed to create user {user.id}: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Failed to write user") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create user {user.id}: {type(e).__name__}: {str(e)}")
            raise StoreUnavailable("Failed to write user") from e
