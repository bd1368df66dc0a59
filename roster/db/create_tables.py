"""Create (or recreate) the students table for the SQL backend.

Usage:
  python -m roster.db.create_tables [--drop]
"""
from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from roster.core.config import get_settings
from roster.core.log import configure_logging
from .session import Base, get_engine
from . import models  # noqa: F401  # registers Student on Base.metadata

log = logging.getLogger(__name__)


def create_all(*, drop: bool = False) -> None:
    engine = get_engine()
    if drop:
        Base.metadata.drop_all(bind=engine)
        log.info("dropped tables: %s", ", ".join(sorted(Base.metadata.tables)))
    Base.metadata.create_all(bind=engine)


def main() -> None:
    ap = argparse.ArgumentParser(description="Create the roster SQL schema")
    ap.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = ap.parse_args()
    configure_logging(get_settings().log_level)
    try:
        create_all(drop=args.drop)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print("Database tables created successfully.")


if __name__ == "__main__":
    main()
