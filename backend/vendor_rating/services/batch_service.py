"""
Batch rating updater.

Recomputes and stores the weighted rating of every vendor that has reviews.
A failure for one vendor (lookup, bad data, write) is logged and recorded in
the report; the remaining vendors still run. There is no retry.

Work runs on a bounded thread pool. Each vendor's read-compute-write is
independent, so concurrency only changes completion order; the report lists
vendors in the order the repository returned them. Setting cancel_event
stops vendors that have not started yet; ratings already written stay.
"""
from __future__ import annotations

import concurrent.futures
import contextvars
import threading
import time
import uuid
from datetime import datetime

import structlog

from ..dependencies import BATCH_WORKERS
from ..models import BatchUpdateDetail, BatchUpdateReport
from ..repositories.base import VendorRepository
from .base_service import BaseService
from .rating_service import RatingService

logger = structlog.get_logger("vendor_rating.services.batch")


class BatchRatingUpdater(BaseService):
    """Recomputes and persists ratings for all ratable vendors."""

    def __init__(
        self,
        repository: VendorRepository,
        ratings: RatingService | None = None,
        max_workers: int = BATCH_WORKERS,
    ):
        super().__init__(repository)
        self.ratings = ratings or RatingService(repository)
        self.max_workers = max(1, max_workers)

    def update_all_vendor_ratings(
        self,
        *,
        cancel_event: threading.Event | None = None,
        dry_run: bool = False,
        now: datetime | None = None,
    ) -> BatchUpdateReport:
        """
        Run the batch and return one detail per vendor attempted.

        Args:
            cancel_event: When set, vendors not yet started are skipped.
            dry_run: Compute ratings but do not persist them.
            now: Reference time for recency weighting.
        """
        cancel_event = cancel_event or threading.Event()
        vendor_ids = self.repository.load_all_ratable_vendors()
        batch_id = uuid.uuid4().hex[:8]
        start_time = time.perf_counter()

        with structlog.contextvars.bound_contextvars(batch_id=batch_id):
            logger.info("batch_update_started", vendors=len(vendor_ids), workers=self.max_workers, dry_run=dry_run)

            with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # One context copy per task: a Context cannot be entered by two threads at once
                futures = [
                    executor.submit(
                        contextvars.copy_context().run,
                        self._update_vendor, vendor_id, cancel_event, dry_run, now,
                    )
                    for vendor_id in vendor_ids
                ]
                outcomes = [f.result() for f in futures]

            details = [d for d in outcomes if d is not None]
            report = BatchUpdateReport(
                updated=sum(1 for d in details if d.ok),
                errors=sum(1 for d in details if not d.ok),
                cancelled=len(details) < len(vendor_ids),
                details=details,
            )

            duration_ms = round((time.perf_counter() - start_time) * 1000, 1)
            log = logger.warning if report.errors or report.cancelled else logger.info
            log(
                "batch_update_completed",
                updated=report.updated,
                errors=report.errors,
                skipped=len(vendor_ids) - report.attempted,
                cancelled=report.cancelled,
                duration_ms=duration_ms,
            )
        return report

    def _update_vendor(
        self,
        vendor_id: str,
        cancel_event: threading.Event,
        dry_run: bool,
        now: datetime | None,
    ) -> BatchUpdateDetail | None:
        if cancel_event.is_set():
            return None

        old_rating = 0.0
        try:
            snapshot = self.repository.load_vendor_snapshot(vendor_id)
            old_rating = snapshot.rating
            result = self.ratings.calculate_weighted_rating(snapshot, now=now)
            if not dry_run:
                self.repository.persist_vendor_rating(vendor_id, result.weighted_rating)
        except Exception as exc:
            logger.warning(
                "vendor_rating_failed",
                vendor_id=vendor_id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return BatchUpdateDetail(
                vendor_id=vendor_id,
                old_rating=old_rating,
                new_rating=old_rating,
                error=str(exc) or type(exc).__name__,
            )

        logger.debug("vendor_rating_updated", vendor_id=vendor_id, old=old_rating, new=result.weighted_rating)
        return BatchUpdateDetail(
            vendor_id=vendor_id,
            old_rating=old_rating,
            new_rating=result.weighted_rating,
        )
