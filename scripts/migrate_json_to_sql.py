"""One-off copy of the JSON roster document into the SQL store."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Make the roster package importable when run straight from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roster.core.config import get_settings  # noqa: E402
from roster.core.errors import ConflictError, ValidationError  # noqa: E402
from roster.core.log import configure_logging  # noqa: E402
from roster.db.create_tables import create_all  # noqa: E402
from roster.domain.students import normalize_student  # noqa: E402
from roster.repositories.json_storage import JsonStudentStore  # noqa: E402
from roster.repositories.sql_repository import SQLStudentRepository  # noqa: E402

log = logging.getLogger("migrate")


def migrate(source: Path) -> tuple[int, int]:
    """Copy every valid record; returns (copied, skipped)."""
    if not source.exists():
        raise SystemExit(f"File not found: {source}")
    create_all()
    students = JsonStudentStore(source).load()
    repo = SQLStudentRepository()
    copied = skipped = 0
    for raw in students:
        try:
            repo.add_student(normalize_student(raw))
            copied += 1
        except (ValidationError, ConflictError) as exc:
            log.warning("skipping %r: %s", raw.get("id") if isinstance(raw, dict) else raw, exc.message)
            skipped += 1
    return copied, skipped


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Copy students.json into DATABASE_URL")
    ap.add_argument("--source", type=Path, default=settings.data_file, help="JSON document to read")
    args = ap.parse_args()
    configure_logging(settings.log_level)
    copied, skipped = migrate(args.source)
    print(f"JSON data migrated: {copied} copied, {skipped} skipped.")


if __name__ == "__main__":
    main()
