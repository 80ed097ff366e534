# clear_data.py
"""Delete every user, entry and notification from the configured database."""
import argparse
import logging
import sys

from database import SessionLocal, Entry, Notification, User, init_db

logger = logging.getLogger(__name__)


def clear_all(db):
    """Remove all rows, children first. Returns the per-table counts."""
    counts = {
        "notifications": db.query(Notification).delete(),
        "entries": db.query(Entry).delete(),
        "users": db.query(User).delete(),
    }
    db.commit()
    return counts


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--yes", action="store_true", help="confirm that all data should be deleted"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    if not args.yes:
        logger.error("Refusing to delete data without --yes")
        return 1

    init_db()
    with SessionLocal() as db:
        counts = clear_all(db)
    logger.info(
        "Deleted %(users)d users, %(entries)d entries and %(notifications)d notifications",
        counts,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
