"""
CLI entrypoint for the expired-session sweep. Run from cron, e.g.:

  python -m authcore.sweep

Or hourly: 0 * * * * cd /path/to/authcore && .venv/bin/python -m authcore.sweep

Expired sessions are already rejected at read time; this only reclaims their rows.
"""

import logging
import sys

from authcore.core.config import get_settings
from authcore.core.database import SessionLocal
from authcore.services.sessions import run_session_sweep

logger = logging.getLogger(__name__)


def main() -> int:
    """Delete sessions whose expires_at has passed."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    db = SessionLocal()
    try:
        sessions_deleted = run_session_sweep(db, settings)
        logger.info("Session sweep completed: sessions_deleted=%s", sessions_deleted)
        return 0
    except Exception as e:
        logger.exception("Session sweep failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
