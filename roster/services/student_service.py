"""Student use cases (validation, uniqueness, lookups) over a configured store."""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from roster.core.config import Settings, get_settings
from roster.domain.filters import FilterState, apply_filters, compute_stats
from roster.domain.students import EDITABLE_FIELDS, STUDENT_FIELDS, normalize_student


class StudentStore(Protocol):
    def list_students(self) -> list[dict]: ...

    def get_student(self, student_id: str) -> dict: ...

    def add_student(self, record: dict) -> dict: ...

    def update_student(self, student_id: str, fields: dict) -> dict: ...

    def delete_student(self, student_id: str) -> dict: ...


def build_store(settings: Settings | None = None) -> StudentStore:
    """Instantiate the store selected by STORAGE_BACKEND."""
    settings = settings or get_settings()
    if settings.storage_backend == "sql":
        from roster.repositories.sql_repository import SQLStudentRepository

        return SQLStudentRepository()
    from roster.repositories.json_storage import JsonStudentStore

    return JsonStudentStore(settings.data_file)


class StudentService:
    """Roster operations shared by the REST API, HTML pages and scripts."""

    def __init__(self, store: StudentStore | None = None) -> None:
        self.store = store or build_store()

    def list_students(self, filters: FilterState | None = None) -> list[dict]:
        students = self.store.list_students()
        if filters is None or not filters.is_active():
            return students
        return apply_filters(students, filters)

    def get_student(self, student_id: str) -> dict:
        return self.store.get_student(student_id)

    def add_student(self, payload: Mapping[str, Any]) -> dict:
        record = normalize_student(payload, STUDENT_FIELDS)
        return self.store.add_student(record)

    def update_student(self, student_id: str, payload: Mapping[str, Any]) -> dict:
        self.store.get_student(student_id)
        fields = normalize_student(payload, EDITABLE_FIELDS)
        return self.store.update_student(student_id, fields)

    def delete_student(self, student_id: str) -> dict:
        return self.store.delete_student(student_id)

    def stats(self) -> dict:
        return compute_stats(self.store.list_students())
