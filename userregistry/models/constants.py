"""Constants shared by validation and the database schema."""

# RFC 5321 upper bound for a full address.
EMAIL_MAX_LENGTH = 320

NAME_MAX_LENGTH = 255

# Length of a canonical UUID4 string.
USER_ID_LENGTH = 36
