#!/usr/bin/env python3
"""Apply Alembic migrations, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3c1f9a2e7b10
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from simskut.config import Settings
from simskut.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the database to the requested revision (default head)."""
    settings = Settings()
    configure_logfire(settings)

    target = argv[1] if len(argv) > 1 else "head"

    try:
        logfire.info("Applying migrations", target=target, environment=settings.environment)

        # env.py reads the URL from Settings, not from alembic.ini
        alembic_cfg = Config("alembic.ini")
        command.upgrade(alembic_cfg, target)

        logfire.info("Migrations applied", target=target)
        return 0

    except Exception as e:
        logfire.error(
            "Migration failed",
            target=target,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv))
