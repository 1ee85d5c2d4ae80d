#!/usr/bin/env python3
"""Start the API server, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from points.config import Settings
from points.util.error import ensure_production_ready
from points.util.logging import setup_logging
from points.util.observability import configure_logfire


def main() -> int:
    """Validate settings, configure logging and serve the app."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        ensure_production_ready(settings)
        logfire.info(
            "Starting points API",
            environment=settings.environment,
            git_sha=settings.git_sha,
        )

        # Importing the app module builds the DI container
        uvicorn.run(
            "points.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
