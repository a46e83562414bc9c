"""
Recompute weighted vendor ratings and store them.

Runs the batch rating updater against the SQLite vendor database and prints
a JSON summary. Ctrl-C stops vendors that have not started yet; ratings
already written are kept.

Usage:
    python backend/scripts/update_vendor_ratings.py [--db PATH] [--workers N]
                                                    [--vendor-id ID] [--dry-run]
                                                    [--init-schema]
"""

import argparse
import json
import signal
import sys
import threading
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import structlog

from vendor_rating.dependencies import BATCH_WORKERS, DB_PATH, get_db, verify_database_exists
from vendor_rating.errors import DomainError
from vendor_rating.logging_config import configure as configure_logging
from vendor_rating.repositories import SQLiteVendorRepository, init_schema
from vendor_rating.services import BatchRatingUpdater, RatingService

logger = structlog.get_logger("vendor_rating.scripts.update_ratings")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Recompute weighted vendor ratings')
    parser.add_argument('--db', type=Path, default=DB_PATH, help='SQLite database path')
    parser.add_argument('--workers', type=int, default=BATCH_WORKERS, help='Worker threads (1 = sequential)')
    parser.add_argument('--vendor-id', help='Only compute this vendor (printed, never saved)')
    parser.add_argument('--dry-run', action='store_true', help='Calculate but do not save')
    parser.add_argument('--init-schema', action='store_true', help='Create tables before running')
    parser.add_argument('--log-level', default=None, help='Override LOG_LEVEL')
    return parser


def main(argv=None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.init_schema:
        with get_db(args.db) as conn:
            init_schema(conn)
    elif not verify_database_exists(args.db):
        logger.error("database_missing", path=str(args.db))
        return 2

    repository = SQLiteVendorRepository(args.db)

    if args.vendor_id:
        try:
            result = RatingService(repository).calculate_weighted_rating_for(args.vendor_id)
        except DomainError as exc:
            logger.error("vendor_rating_failed", vendor_id=args.vendor_id, **exc.to_dict())
            return 1
        print(json.dumps(result.model_dump(), indent=2))
        return 0

    cancel_event = threading.Event()
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: cancel_event.set())
    try:
        updater = BatchRatingUpdater(repository, max_workers=args.workers)
        report = updater.update_all_vendor_ratings(cancel_event=cancel_event, dry_run=args.dry_run)
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    summary = report.model_dump(exclude={'details'})
    summary['failed_vendors'] = [d.model_dump() for d in report.details if not d.ok]
    summary['dry_run'] = args.dry_run
    print(json.dumps(summary, indent=2))
    return 1 if report.errors else 0


if __name__ == "__main__":
    sys.exit(main())
