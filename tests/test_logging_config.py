import pytest

from userregistry.logging_config import mask_email


@pytest.mark.parametrize("email,expected", [
    ("user@example.com", "u***@example.com"),
    ("a@example.com", "a***@example.com"),
    ('"odd@local"@example.com', '"***@example.com'),
    ("not-an-email", "***"),
    (None, "***"),
])
def test_mask_email(email, expected):
    assert mask_email(email) == expected
