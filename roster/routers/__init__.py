"""
FastAPI routers grouped by surface (REST API, HTML pages).

Each module exposes an APIRouter included by roster.app; endpoints reach the
StudentService through request.app.state instead of importing a global.
"""

from __future__ import annotations

from fastapi import Request

from roster.services.student_service import StudentService


def get_student_service(request: Request) -> StudentService:
    svc = getattr(getattr(request.app, "state", None), "student_service", None)
    if not svc:
        raise RuntimeError("StudentService not configured")
    return svc
