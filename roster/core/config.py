"""
Configuration helpers for the roster backend.

Routers/services read a Settings object instead of fetching os.environ
directly, so tests can swap the environment and call get_settings.cache_clear().
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

ROOT_DIR = Path(__file__).resolve().parents[2]
DEFAULT_DATA_FILE = ROOT_DIR / "data" / "students.json"
STORAGE_BACKENDS = ("json", "sql")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_file: Path
    storage_backend: str
    database_url: str
    api_prefix: str
    cors_origins: tuple[str, ...]
    log_level: str
    port: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _prefix(value: str | None) -> str:
        cleaned = (value or "").strip().strip("/")
        return f"/{cleaned}" if cleaned else ""

    def _origins(value: str | None, app_env: str, port: int) -> tuple[str, ...]:
        if value is not None and value.strip():
            return tuple(sorted({o.strip().rstrip("/") for o in value.split(",") if o.strip()}))
        origins = {f"http://localhost:{port}", f"http://127.0.0.1:{port}"}
        if app_env != "prod":
            origins.update({"http://localhost:8000", "http://127.0.0.1:8000"})
        return tuple(sorted(origins))

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    port = _int(os.getenv("PORT", "3000"), 3000)
    backend = (os.getenv("STORAGE_BACKEND") or "json").strip().lower()
    if backend not in STORAGE_BACKENDS:
        backend = "json"

    return Settings(
        app_env=app_env,
        data_file=Path(os.getenv("DATA_FILE") or DEFAULT_DATA_FILE),
        storage_backend=backend,
        database_url=os.getenv("DATABASE_URL", ""),
        api_prefix=_prefix(os.getenv("API_PREFIX", "/api")),
        cors_origins=_origins(os.getenv("CORS_ORIGINS"), app_env, port),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        port=port,
    )
