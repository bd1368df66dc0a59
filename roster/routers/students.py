"""REST endpoints for student records (JSON in, JSON out)."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Request

from roster.domain.filters import FilterState
from roster.routers import get_student_service
from roster.services.student_service import StudentService

router = APIRouter(prefix="/students", tags=["students"])


@router.get("")
def list_students(request: Request, svc: StudentService = Depends(get_student_service)):
    filters = FilterState.from_mapping(request.query_params)
    return svc.list_students(filters)


# declared before /{student_id:path} so "stats/summary" is never read as an id
@router.get("/stats/summary")
def stats_summary(svc: StudentService = Depends(get_student_service)):
    return svc.stats()


@router.get("/{student_id:path}")
def get_student(student_id: str, svc: StudentService = Depends(get_student_service)):
    return svc.get_student(student_id)


@router.post("", status_code=201)
def create_student(payload: dict = Body(...), svc: StudentService = Depends(get_student_service)):
    return svc.add_student(payload)


@router.put("/{student_id:path}")
def update_student(student_id: str, payload: dict = Body(...), svc: StudentService = Depends(get_student_service)):
    return svc.update_student(student_id, payload)


@router.delete("/{student_id:path}")
def delete_student(student_id: str, svc: StudentService = Depends(get_student_service)):
    svc.delete_student(student_id)
    return {"message": "Student deleted successfully"}
