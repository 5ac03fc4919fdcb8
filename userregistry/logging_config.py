"""Process-wide logging configuration for userregistry."""

from __future__ import annotations

from logging.config import dictConfig

_LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        }
    },
    "loggers": {
        "uvicorn": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "uvicorn.error": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "uvicorn.access": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "alembic": {"handlers": ["console"], "level": "INFO", "propagate": False},
    },
}


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging once at startup."""
    config = dict(_LOGGING_CONFIG)
    config["root"] = {"level": level.upper(), "handlers": ["console"]}
    dictConfig(config)


def mask_email(email: str) -> str:
    """Shorten an address for log lines: ``user@example.com`` -> ``u***@example.com``."""
    if not isinstance(email, str) or "@" not in email:
        return "***"
    local, _, domain = email.rpartition("@")
    return f"{local[:1]}***@{domain}"
