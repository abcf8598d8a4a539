"""Archive notifications older than a cutoff for every active user.

Meant to run from cron; archived notifications stay in the table but no
longer count towards the unread badge.
"""

from __future__ import annotations

import argparse
import logging
from datetime import timedelta

from bcet_connect.application.use_cases.notifications import archive_notifications
from bcet_connect.config import get_settings
from bcet_connect.domain.errors import AppError
from bcet_connect.infrastructure.database import SessionLocal, initialize_database
from bcet_connect.infrastructure.repositories import UserRepository
from bcet_connect.logging_config import configure_logging
from bcet_connect.utils import now_utc

logger = logging.getLogger("archive_notifications")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--days",
        type=int,
        default=30,
        help="Archive notifications created more than this many days ago (default: 30)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if args.days < 1:
        raise SystemExit("--days must be a positive number")

    configure_logging(get_settings().log_level)
    initialize_database()
    cutoff = now_utc() - timedelta(days=args.days)

    session = SessionLocal()
    total = 0
    try:
        for user_id in UserRepository(session).list_active_ids():
            try:
                total += archive_notifications(session, user_id, cutoff)
            except AppError as exc:
                logger.error("Could not archive notifications of user %s: %s", user_id, exc.message)
    finally:
        session.close()

    logger.info("Archived %d notification(s) older than %s", total, cutoff.isoformat())


if __name__ == "__main__":
    main()
