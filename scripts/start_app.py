#!/usr/bin/env python3
"""Start the SimsKut API, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from simskut.config import Settings
from simskut.util.logging import setup_logging
from simskut.util.observability import configure_logfire


def main() -> int:
    """Configure observability, then serve the app with uvicorn."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting SimsKut API",
            environment=settings.environment,
            git_sha=settings.git_sha,
            port=settings.port,
        )

        # The app module configures Logfire again on import (no-op)
        uvicorn.run(
            "simskut.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            ws="websockets",
        )

        return 0

    except Exception as e:
        logfire.error(
            "SimsKut API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
