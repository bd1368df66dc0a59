"""
JSON document store for student records.

The whole roster lives in one JSON array. Every mutation reads the current
document, changes the in-memory copy and overwrites the file. A missing file
is an empty roster; it is created on the first write.

Mutations in one process go through a single lock so concurrent requests
served by the thread pool cannot interleave their read-modify-write cycles.
Separate processes sharing the same file are not coordinated.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
import threading
from pathlib import Path

from roster.core.errors import ConflictError, NotFoundError, StorageError
from roster.domain.students import EDITABLE_FIELDS, email_taken, find_index

log = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644


class JsonStudentStore:
    """Read/write the roster as a single pretty-printed JSON document."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    # -------------------------- document io --------------------------
    def load(self) -> list[dict]:
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            log.error("Error reading students data from %s: %s", self.path, exc)
            raise StorageError("Failed to read students data") from exc
        if not isinstance(data, list):
            log.error("Students data in %s is not a JSON array", self.path)
            raise StorageError("Students data is malformed")
        return data

    def save(self, students: list[dict]) -> None:
        payload = json.dumps(students, ensure_ascii=False, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".students-", suffix=".json", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.chmod(tmp_name, self._file_mode())
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            log.error("Error writing students data to %s: %s", self.path, exc)
            raise StorageError("Failed to save students data") from exc

    def _file_mode(self) -> int:
        """Current document's permissions, or DEFAULT_FILE_MODE for a new document."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    # -------------------------- students --------------------------
    def list_students(self) -> list[dict]:
        return self.load()

    def get_student(self, student_id: str) -> dict:
        students = self.load()
        idx = find_index(students, student_id)
        if idx == -1:
            raise NotFoundError("Student not found")
        return students[idx]

    def add_student(self, record: dict) -> dict:
        with self._lock:
            students = self.load()
            if find_index(students, record["id"]) != -1:
                raise ConflictError("Student ID already exists")
            if email_taken(students, record["email"]):
                raise ConflictError("Email already exists")
            students.append(dict(record))
            self.save(students)
        log.info("student added id=%s total=%d", record["id"], len(students))
        return record

    def update_student(self, student_id: str, fields: dict) -> dict:
        with self._lock:
            students = self.load()
            idx = find_index(students, student_id)
            if idx == -1:
                raise NotFoundError("Student not found")
            email = fields.get("email", students[idx].get("email"))
            if email_taken(students, email, exclude_id=student_id):
                raise ConflictError("Email already exists")
            updated = dict(students[idx])
            updated.update({name: fields[name] for name in EDITABLE_FIELDS if name in fields})
            updated["id"] = student_id
            students[idx] = updated
            self.save(students)
        log.info("student updated id=%s", student_id)
        return updated

    def delete_student(self, student_id: str) -> dict:
        with self._lock:
            students = self.load()
            idx = find_index(students, student_id)
            if idx == -1:
                raise NotFoundError("Student not found")
            removed = students.pop(idx)
            self.save(students)
        log.info("student deleted id=%s total=%d", student_id, len(students))
        return removed
