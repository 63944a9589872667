"""Send daily or weekly notification digests; meant to run from cron."""

from __future__ import annotations

import argparse
import logging

from eventlink.application.use_cases.notifications import send_digests
from eventlink.config import get_settings
from eventlink.domain.entities import DIGEST_MODE_DAILY, DIGEST_MODE_WEEKLY
from eventlink.infrastructure.database import SessionLocal, initialize_database

logger = logging.getLogger("eventlink.digests")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Email unread notification digests.")
    parser.add_argument(
        "mode",
        choices=(DIGEST_MODE_DAILY, DIGEST_MODE_WEEKLY),
        help="Which digest subscribers to process",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=get_settings().log_level.upper())
    initialize_database()

    session = SessionLocal()
    try:
        sent = send_digests(session, args.mode)
    finally:
        session.close()
    logger.info("Sent %s %s digest(s)", sent, args.mode)


if __name__ == "__main__":
    main()
