"""Seed the database with the default admin account.

Usage: handytrack-seed
"""

import logging
import sys

from sqlmodel import Session

from handytrack.database import engine, init_db
from handytrack.services.auth_service import ADMIN_USERNAME, seed_admin

logger = logging.getLogger(__name__)


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    logger.info("Starting database seed...")
    try:
        init_db()
        with Session(engine) as session:
            created = seed_admin(session)
    except Exception:
        logger.exception("Seed failed")
        return 1

    if created:
        logger.info("Username: %s", ADMIN_USERNAME)
    logger.info("Seed completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
