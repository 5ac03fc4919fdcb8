"""Input-shape validation for user creation."""

from email_validator import EmailNotValidError, validate_email

from userregistry.core.errors import InvalidInput
from userregistry.models.constants import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH


def validate_email_address(email) -> str:
    """Check that ``email`` is a syntactically valid address.

    The address is returned exactly as given. The validator's normalized form
    is only used to decide validity, never stored, so comparisons stay
    case-sensitive.

    Raises:
        InvalidInput: If the value is missing, not a string, padded with
            whitespace, too long, or not a valid address.
    """
    if email is None:
        raise InvalidInput("email", "is required")
    if not isinstance(email, str):
        raise InvalidInput("email", "must be a string")
    if not email:
        raise InvalidInput("email", "must not be empty")
    if email != email.strip():
        raise InvalidInput("email", "must not have leading or trailing whitespace")
    if len(email) > EMAIL_MAX_LENGTH:
        raise InvalidInput("email", f"must be at most {EMAIL_MAX_LENGTH} characters")

    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidInput("email", str(e)) from e
    return email


def validate_name(name) -> str:
    """Check that ``name`` is a non-blank string within the length limit."""
    if name is None:
        raise InvalidInput("name", "is required")
    if not isinstance(name, str):
        raise InvalidInput("name", "must be a string")
    if not name.strip():
        raise InvalidInput("name", "must not be empty")
    if len(name) > NAME_MAX_LENGTH:
        raise InvalidInput("name", f"must be at most {NAME_MAX_LENGTH} characters")
    return name
