"""Run the roster server: ``python -m roster``."""
import logging

import uvicorn

from roster.core.config import get_settings
from roster.core.log import configure_logging

log = logging.getLogger("roster")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    base = f"http://localhost:{settings.port}"
    log.info("Server is running on %s", base)
    log.info("Student roster API available at %s%s/students", base, settings.api_prefix)
    log.info("Health check: %s%s/health", base, settings.api_prefix)
    log.info("Storage backend: %s", settings.storage_backend)
    uvicorn.run("roster.app:app", host="0.0.0.0", port=settings.port, reload=False)


if __name__ == "__main__":
    main()
