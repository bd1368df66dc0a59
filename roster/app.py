import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from roster.core.config import ROOT_DIR, Settings, get_settings
from roster.core.errors import RosterError
from roster.core.log import configure_logging
from roster.routers import health as health_router
from roster.routers import pages as pages_router
from roster.routers import students as students_router
from roster.services.student_service import StudentService, StudentStore, build_store

log = logging.getLogger(__name__)

WEB = os.path.join(ROOT_DIR, "web")
TEMPLATES = os.path.join(ROOT_DIR, "templates")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; "
            "img-src 'self' data:; "
            "style-src 'self' 'unsafe-inline'; "
            "script-src 'self'; "
            "form-action 'self'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


async def _roster_error_handler(request: Request, exc: RosterError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Request body must be a JSON object"}, status_code=400)


async def _unhandled_error_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(settings: Settings | None = None, store: StudentStore | None = None) -> FastAPI:
    """Build the roster app; uvicorn uses the module-level ``app`` below."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Student Roster API")
    app.state.settings = settings
    app.state.student_service = StudentService(store or build_store(settings))
    app.state.templates = Jinja2Templates(directory=TEMPLATES)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    app.add_exception_handler(RosterError, _roster_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    if os.path.isdir(WEB):
        app.mount("/static", StaticFiles(directory=WEB), name="static")

    app.include_router(students_router.router, prefix=settings.api_prefix)
    app.include_router(health_router.router, prefix=settings.api_prefix)
    app.include_router(pages_router.router)
    return app


app = create_app()
