"""Database connection and session management for userregistry.

This module supports both:
- Local SQLite (default for dev and tests)
- PostgreSQL in production via `DATABASE_URL`
"""

import logging
import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Database URL - SQLite by default (local dev)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./userregistry.db")


def _is_sqlite_url(database_url: str) -> bool:
    return "sqlite" in (database_url or "")


def get_engine_kwargs(database_url: str) -> dict:
    """Return deterministic create_engine kwargs for a DB URL.

    This is separated to allow deterministic unit testing without connecting.
    """
    engine_kwargs: dict = {
        "echo": os.getenv("DEBUG", "False").lower() == "true",
        "pool_pre_ping": True,
    }

    if _is_sqlite_url(database_url):
        # Request handlers run in FastAPI's threadpool; sessions cross threads.
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        return engine_kwargs

    engine_kwargs["pool_size"] = int(os.getenv("DB_POOL_SIZE", "5"))
    engine_kwargs["max_overflow"] = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    engine_kwargs["pool_timeout"] = int(os.getenv("DB_POOL_TIMEOUT_SEC", "30"))
    return engine_kwargs


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    """Enable WAL so concurrent readers are not blocked by a writer."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    engine = create_engine(database_url, **get_engine_kwargs(database_url))
    if _is_sqlite_url(database_url):
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


# Create engine (module-level singleton)
engine = build_engine(DATABASE_URL)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for declarative models
Base = declarative_base()


def get_db() -> Session:
    """Get database session (dependency for FastAPI)."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_alembic_upgrade(database_url: str = None) -> None:
    """Run Alembic migrations to head in-process (non-interactive)."""
    from alembic import command
    from alembic.config import Config

    alembic_cfg = Config(os.getenv("ALEMBIC_INI", "alembic.ini"))
    # Ensure Alembic uses the same runtime DB URL.
    alembic_cfg.set_main_option("sqlalchemy.url", (database_url or DATABASE_URL).replace("%", "%%"))
    command.upgrade(alembic_cfg, "head")


def init_db(*, engine_override: Engine = None) -> None:
    """Initialize database schema once, before the registry is first used.

    - Default: `create_all()` against the configured engine.
    - With `RUN_MIGRATIONS=true`: Alembic migrations instead, against the
      override engine's URL when one is given.
    """
    # Import for its side effect of registering the users table on Base.
    from userregistry.database import models  # noqa: F401

    run_migrations = os.getenv("RUN_MIGRATIONS", "False").lower() == "true"
    if run_migrations:
        logger.info("Running Alembic migrations to head")
        database_url = engine_override.url.render_as_string(hide_password=False) if engine_override else None
        run_alembic_upgrade(database_url)
        return

    Base.metadata.create_all(bind=engine_override or engine)
