"""Domain helpers for student records: field list, normalisation, validation."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from roster.core.errors import ValidationError

STUDENT_FIELDS = ("id", "fullName", "gender", "email", "program", "yearLevel", "university")
EDITABLE_FIELDS = STUDENT_FIELDS[1:]
GENDERS = ("Male", "Female")


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def missing_fields(payload: Mapping[str, Any], fields: Iterable[str] = STUDENT_FIELDS) -> list[str]:
    """Return the required fields that are absent or blank in payload."""
    return [name for name in fields if not _clean(payload.get(name))]


def normalize_student(payload: Mapping[str, Any], fields: Iterable[str] = STUDENT_FIELDS) -> dict:
    """
    Build a clean record from an incoming payload.

    Only known fields are kept, in canonical order. Raises ValidationError when
    a required field is blank or gender is not one of GENDERS.
    """
    fields = tuple(fields)
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    if missing_fields(payload, fields):
        raise ValidationError("All fields are required")
    record = {name: _clean(payload.get(name)) for name in fields}
    if "gender" in record and record["gender"] not in GENDERS:
        raise ValidationError(f"Gender must be one of: {', '.join(GENDERS)}")
    return record


def find_index(students: list[dict], student_id: str) -> int:
    """Position of the record with student_id, or -1."""
    for idx, student in enumerate(students):
        if student.get("id") == student_id:
            return idx
    return -1


def email_taken(students: Iterable[Mapping[str, Any]], email: str, *, exclude_id: str | None = None) -> bool:
    """Check if any record other than exclude_id already owns email."""
    for student in students:
        if student.get("email") == email and student.get("id") != exclude_id:
            return True
    return False
