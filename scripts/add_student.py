#!/usr/bin/env python3
"""
Register a student directly in the configured store (JSON file or SQL).

Usage:
  python scripts/add_student.py --id S1 --name "Ana Souza" --gender Female \
      --email ana@example.com --program CS --year "2nd Year" --university UFMG
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the roster package importable when run straight from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roster.core.config import get_settings  # noqa: E402
from roster.core.errors import RosterError  # noqa: E402
from roster.core.log import configure_logging  # noqa: E402
from roster.domain.students import GENDERS  # noqa: E402
from roster.services.student_service import StudentService  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Add a student to the roster")
    ap.add_argument("--id", required=True, help="student ID (must be unique)")
    ap.add_argument("--name", required=True, help="full name")
    ap.add_argument("--gender", required=True, choices=GENDERS)
    ap.add_argument("--email", required=True, help="email (must be unique)")
    ap.add_argument("--program", required=True)
    ap.add_argument("--year", required=True, help="year level")
    ap.add_argument("--university", required=True)
    args = ap.parse_args(argv)

    configure_logging(get_settings().log_level)
    svc = StudentService()
    try:
        student = svc.add_student(
            {
                "id": args.id,
                "fullName": args.name,
                "gender": args.gender,
                "email": args.email,
                "program": args.program,
                "yearLevel": args.year,
                "university": args.university,
            }
        )
    except RosterError as exc:
        sys.stderr.write(f"Error: {exc.message}\n")
        return 1
    print("OK: student added")
    print(f"  ID: {student['id']}")
    print(f"  Name: {student['fullName']}")
    print(f"  Email: {student['email']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
