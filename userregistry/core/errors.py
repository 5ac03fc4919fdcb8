"""Error taxonomy for user registration.

``InvalidInput`` and ``DuplicateEmail`` are business-rule failures the caller
can correct. ``StoreUnavailable`` is an infrastructure failure and is kept
distinct from both so a broken database never reads as a duplicate.
"""


class UserRegistryError(Exception):
    """Base class for failures surfaced by the user registry."""


class InvalidInput(UserRegistryError):
    """Email or name is missing or malformed."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class DuplicateEmail(UserRegistryError):
    """A user with this email already exists."""

    def __init__(self, email: str):
        super().__init__("Email already registered")
        self.email = email


class StoreUnavailable(UserRegistryError):
    """The persistence layer could not be reached or failed to write."""


class EmailConstraintViolation(Exception):
    """Raised by a store when its unique email constraint rejects an insert.

    Stores raise this instead of leaking driver errors; the registry turns it
    into ``DuplicateEmail``.
    """

    def __init__(self, email: str):
        super().__init__("Unique email constraint violated")
        self.email = email
