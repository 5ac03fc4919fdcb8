"""SQLAlchemy database models for userregistry."""

from sqlalchemy import Column, String, DateTime, UniqueConstraint

from userregistry.database.database import Base
from userregistry.models.user import as_utc
from userregistry.models.constants import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, USER_ID_LENGTH

EMAIL_UNIQUE_CONSTRAINT = "uq_users_email"


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"
    __table_args__ = (
        # Authoritative guard for email uniqueness; the registry's lookup is only a fast path.
        UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),
    )

    id = Column(String(USER_ID_LENGTH), primary_key=True)
    email = Column(String(EMAIL_MAX_LENGTH), nullable=False)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from userregistry.models.user import User
        return User(
            id=self.id,
            email=self.email,
            name=self.name,
            created_at=as_utc(self.created_at),
        )

    @classmethod
    def from_pydantic(cls, user):
        """Create database model from Pydantic model."""
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            created_at=as_utc(user.created_at),
        )
