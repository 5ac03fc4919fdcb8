"""Database migration runner.

Goal:
- Apply Alembic migrations to head before the service first handles traffic.
- If the schema already exists but Alembic history is out of sync (e.g. the
  table was created by `create_all()`), detect that safely and `stamp head`.

Run as a one-off job: `python -m userregistry.database.migrate_runner`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import List

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from userregistry.database.database import DATABASE_URL, build_engine
from userregistry.database.models import EMAIL_UNIQUE_CONSTRAINT
from userregistry.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _alembic_cfg(database_url: str) -> Config:
    cfg = Config(os.getenv("ALEMBIC_INI", "alembic.ini"))
    # configparser interpolation: escape literal percent signs (e.g. in passwords).
    cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return cfg


def _missing_requirements(engine) -> List[str]:
    """Return human-readable schema gaps that make stamping head unsafe."""
    inspector = inspect(engine)
    if not inspector.has_table("users"):
        return ["missing table: users"]

    missing: List[str] = []
    columns = {col["name"] for col in inspector.get_columns("users")}
    for column in ("id", "email", "name", "created_at"):
        if column not in columns:
            missing.append(f"missing column: users.{column}")

    # SQLite may report unnamed constraints, so also accept a unique index or constraint on email alone.
    unique_sets = [c["column_names"] for c in inspector.get_unique_constraints("users")]
    unique_sets += [i["column_names"] for i in inspector.get_indexes("users") if i.get("unique")]
    names = {c.get("name") for c in inspector.get_unique_constraints("users")}
    if EMAIL_UNIQUE_CONSTRAINT not in names and ["email"] not in unique_sets:
        missing.append("missing unique constraint on users.email")
    return missing


def run(database_url: str = DATABASE_URL) -> int:
    cfg = _alembic_cfg(database_url)
    try:
        command.upgrade(cfg, "head")
        logger.info("Schema upgraded to head")
        return 0
    except Exception as e:
        msg = str(e).lower()
        looks_like_already_applied = any(s in msg for s in ["duplicate", "already exists"])
        if not looks_like_already_applied:
            raise

        # Only stamp head if we can verify the expected schema is present.
        engine = build_engine(database_url)
        try:
            missing = _missing_requirements(engine)
        finally:
            engine.dispose()
        if missing:
            raise RuntimeError(
                "Alembic upgrade failed and schema is not at expected baseline; refusing to stamp head. "
                + "; ".join(missing)
            ) from e

        logger.warning("Schema already present without Alembic history; stamping head")
        command.stamp(cfg, "head")
        return 0


def main() -> int:
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    return run()


if __name__ == "__main__":
    sys.exit(main())
