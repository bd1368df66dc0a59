"""Student store backed by SQLAlchemy, same contract as JsonStudentStore."""
from __future__ import annotations

import logging
from contextlib import contextmanager

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from roster.core.errors import ConflictError, NotFoundError, StorageError
from roster.db.models import Student
from roster.db.session import get_session

log = logging.getLogger(__name__)

_COLUMNS = {
    "fullName": "full_name",
    "gender": "gender",
    "email": "email",
    "program": "program",
    "yearLevel": "year_level",
    "university": "university",
}


@contextmanager
def _guarded_session(failure: str):
    """Open a session; any database error inside the block becomes StorageError(failure)."""
    try:
        with get_session() as session:
            yield session
    except IntegrityError as exc:
        # a concurrent writer took the id or email between check and insert
        raise ConflictError("Student ID or email already exists") from exc
    except SQLAlchemyError as exc:
        log.error("%s: %s", failure, exc)
        raise StorageError(failure) from exc


class SQLStudentRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    def list_students(self) -> list[dict]:
        with _guarded_session("Failed to fetch students") as session:
            rows = session.execute(select(Student).order_by(Student.position)).scalars().all()
            return [row.to_dict() for row in rows]

    def get_student(self, student_id: str) -> dict:
        with _guarded_session("Failed to fetch student") as session:
            entity = session.get(Student, student_id)
            if not entity:
                raise NotFoundError("Student not found")
            return entity.to_dict()

    def email_exists(self, email: str, *, exclude_id: str | None = None) -> bool:
        with _guarded_session("Failed to fetch students") as session:
            return self._email_taken(session, email, exclude_id=exclude_id)

    def add_student(self, record: dict) -> dict:
        with _guarded_session("Failed to save student") as session:
            if session.get(Student, record["id"]):
                raise ConflictError("Student ID already exists")
            if self._email_taken(session, record["email"]):
                raise ConflictError("Email already exists")
            position = session.execute(select(func.coalesce(func.max(Student.position), 0))).scalar_one() + 1
            entity = Student(id=record["id"], position=position)
            for key, column in _COLUMNS.items():
                setattr(entity, column, record[key])
            session.add(entity)
            self._commit(session)
            session.refresh(entity)
            log.info("student added id=%s", entity.id)
            return entity.to_dict()

    def update_student(self, student_id: str, fields: dict) -> dict:
        with _guarded_session("Failed to update student") as session:
            entity = session.get(Student, student_id)
            if not entity:
                raise NotFoundError("Student not found")
            email = fields.get("email", entity.email)
            if self._email_taken(session, email, exclude_id=student_id):
                raise ConflictError("Email already exists")
            for key, column in _COLUMNS.items():
                if key in fields:
                    setattr(entity, column, fields[key])
            self._commit(session)
            session.refresh(entity)
            log.info("student updated id=%s", student_id)
            return entity.to_dict()

    def delete_student(self, student_id: str) -> dict:
        with _guarded_session("Failed to delete student") as session:
            entity = session.get(Student, student_id)
            if not entity:
                raise NotFoundError("Student not found")
            removed = entity.to_dict()
            session.delete(entity)
            self._commit(session)
            log.info("student deleted id=%s", student_id)
            return removed

    @staticmethod
    def _email_taken(session: Session, email: str, *, exclude_id: str | None = None) -> bool:
        stmt = select(Student.id).where(Student.email == email)
        if exclude_id is not None:
            stmt = stmt.where(Student.id != exclude_id)
        return session.execute(stmt).first() is not None

    @staticmethod
    def _commit(session: Session) -> None:
        try:
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise
