"""HTML roster page: list with filters, stats, add form and delete buttons."""

from __future__ import annotations

from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from roster.core.errors import RosterError
from roster.domain.filters import FilterState
from roster.domain.students import GENDERS
from roster.routers import get_student_service
from roster.services.roster_view import RosterView
from roster.services.student_service import StudentService

router = APIRouter(prefix="", tags=["pages"])


def _templates(request: Request) -> Jinja2Templates:
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates not configured")


def _redirect_home(*, notice: str = "", error: str = "") -> RedirectResponse:
    params = {k: v for k, v in (("notice", notice), ("error", error)) if v}
    dest = "/" + (f"?{urlencode(params)}" if params else "")
    return RedirectResponse(dest, status_code=303)


@router.get("/", response_class=HTMLResponse)
def roster_page(
    request: Request,
    notice: str = "",
    error: str = "",
    svc: StudentService = Depends(get_student_service),
):
    filters = FilterState.from_mapping(request.query_params)
    status_code = 200
    try:
        students = svc.list_students()
    except RosterError as exc:
        students = []
        error = f"Error loading students: {exc.message}"
        status_code = exc.status_code
    view = RosterView(students, filters)
    context = view.context()
    context.update({"notice": notice, "error": error, "genders": GENDERS})
    return _templates(request).TemplateResponse(request, "roster.html", context, status_code=status_code)


@router.post("/students/new")
def add_student_form(
    student_id: str = Form("", alias="id"),
    fullName: str = Form(""),
    gender: str = Form(""),
    email: str = Form(""),
    program: str = Form(""),
    yearLevel: str = Form(""),
    university: str = Form(""),
    svc: StudentService = Depends(get_student_service),
):
    payload = {
        "id": student_id,
        "fullName": fullName,
        "gender": gender,
        "email": email,
        "program": program,
        "yearLevel": yearLevel,
        "university": university,
    }
    try:
        svc.add_student(payload)
    except RosterError as exc:
        return _redirect_home(error=f"Error adding student: {exc.message}")
    return _redirect_home(notice="Student added successfully!")


# ids may contain "/", so the id segment is a path
@router.post("/students/{student_id:path}/delete")
def delete_student_form(student_id: str, svc: StudentService = Depends(get_student_service)):
    try:
        svc.delete_student(student_id)
    except RosterError as exc:
        return _redirect_home(error=f"Error deleting student: {exc.message}")
    return _redirect_home(notice="Student deleted successfully!")
