"""
SQLite implementation of the VendorRepository contract.

Opens one connection per call via get_db(), so batch worker threads never
share a connection. Rows are validated into VendorSnapshot at this
boundary; the services never see sqlite3.Row objects.
"""
from __future__ import annotations

import sqlite3
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable

import structlog

from ..config.constants import TREND_WINDOW_DAYS
from ..dependencies import get_db
from ..errors import NotFoundError, PersistenceError
from ..models import VendorSnapshot
from .base import snapshot_from_record
from .query_builder import QueryBuilder

logger = structlog.get_logger("vendor_rating.repositories.sqlite")

VENDOR_COLUMNS = """
    v.id, v.business_name, v.verification_status, v.rating, v.review_count,
    v.completion_rate, v.response_time_hours, v.city
"""


def to_db_timestamp(value: datetime) -> str:
    """Serialize a datetime the way reviews and bookings are stored (UTC ISO-8601)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SQLiteVendorRepository:
    """Vendor storage backed by the schema in repositories.schema."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.db_path = db_path
        self._clock = clock

    # --- Query helpers ---

    def _execute_one(self, conn: sqlite3.Connection, sql: str, params: list[Any] | tuple = ()) -> sqlite3.Row | None:
        cursor = conn.cursor()
        cursor.execute(sql, params)
        return cursor.fetchone()

    def _execute_many(self, conn: sqlite3.Connection, sql: str, params: list[Any] | tuple = ()) -> list[sqlite3.Row]:
        cursor = conn.cursor()
        cursor.execute(sql, params)
        return cursor.fetchall()

    # --- Contract ---

    def load_vendor_snapshot(self, vendor_id: str) -> VendorSnapshot:
        qb = QueryBuilder("vendors v").where("v.id = ?", vendor_id)
        sql, params = qb.build_select(VENDOR_COLUMNS)
        with get_db(self.db_path) as conn:
            row = self._execute_one(conn, sql, params)
            if row is None:
                raise NotFoundError(f"Vendor {vendor_id} not found", details={"vendor_id": vendor_id})
            return self._build_snapshots(conn, [row], include_reviews=True)[0]

    def load_category_peers(self, category: str) -> list[VendorSnapshot]:
        qb = (
            QueryBuilder("vendors v")
            .filter_verified(True)
            .filter_category(category)
            .order_by("v.id")
        )
        sql, params = qb.build_select(VENDOR_COLUMNS)
        with get_db(self.db_path) as conn:
            rows = self._execute_many(conn, sql, params)
            return self._build_snapshots(conn, rows, include_reviews=False)

    def load_all_ratable_vendors(self) -> list[str]:
        qb = QueryBuilder("vendors v").where("v.review_count > 0").order_by("v.id")
        sql, params = qb.build_select("v.id")
        with get_db(self.db_path) as conn:
            return [row["id"] for row in self._execute_many(conn, sql, params)]

    def persist_vendor_rating(self, vendor_id: str, rating: float) -> None:
        try:
            with get_db(self.db_path) as conn:
                cursor = conn.execute(
                    "UPDATE vendors SET rating = ?, rating_updated_at = ? WHERE id = ?",
                    (rating, to_db_timestamp(self._clock()), vendor_id),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError(f"Vendor {vendor_id} not found", details={"vendor_id": vendor_id})
                conn.commit()
        except sqlite3.Error as exc:
            logger.error("persist_rating_failed", vendor_id=vendor_id, error=str(exc))
            raise PersistenceError(
                f"Failed to store rating for vendor {vendor_id}: {exc}",
                details={"vendor_id": vendor_id},
            ) from exc

    def load_candidates(
        self,
        category: str | None = None,
        location: str | None = None,
        verified_only: bool = True,
        now: datetime | None = None,
    ) -> list[VendorSnapshot]:
        qb = (
            QueryBuilder("vendors v")
            .filter_verified(verified_only)
            .filter_category(category)
            .filter_city(location)
            .order_by("v.id")
        )
        sql, params = qb.build_select(VENDOR_COLUMNS)
        with get_db(self.db_path) as conn:
            rows = self._execute_many(conn, sql, params)
            return self._build_snapshots(conn, rows, include_reviews=True, now=now)

    # --- Snapshot assembly ---

    def _build_snapshots(
        self,
        conn: sqlite3.Connection,
        rows: list[sqlite3.Row],
        *,
        include_reviews: bool,
        now: datetime | None = None,
    ) -> list[VendorSnapshot]:
        if not rows:
            return []
        vendor_ids = [row["id"] for row in rows]
        categories = self._load_categories(conn, vendor_ids)
        reviews = self._load_reviews(conn, vendor_ids) if include_reviews else {}
        bookings = self._load_recent_booking_counts(conn, vendor_ids, now)

        snapshots = []
        for row in rows:
            vendor_id = row["id"]
            snapshots.append(snapshot_from_record({
                "vendor_id": vendor_id,
                "business_name": row["business_name"] or "",
                "verification_status": row["verification_status"],
                "rating": row["rating"] or 0.0,
                "review_count": row["review_count"],
                "completion_rate": row["completion_rate"] or 0.0,
                "response_time_hours": row["response_time_hours"] or 0.0,
                "city": row["city"],
                "service_categories": categories.get(vendor_id, []),
                "reviews": reviews.get(vendor_id, []),
                "recent_booking_count": bookings.get(vendor_id, 0),
            }))
        return snapshots

    def _load_categories(self, conn: sqlite3.Connection, vendor_ids: list[str]) -> dict[str, list[str]]:
        qb = QueryBuilder("vendor_categories vc").where_in("vc.vendor_id", vendor_ids)
        qb.order_by("vc.vendor_id, vc.position, vc.category")
        sql, params = qb.build_select("vc.vendor_id, vc.category")
        result: dict[str, list[str]] = defaultdict(list)
        for row in self._execute_many(conn, sql, params):
            result[row["vendor_id"]].append(row["category"])
        return result

    def _load_reviews(self, conn: sqlite3.Connection, vendor_ids: list[str]) -> dict[str, list[dict]]:
        qb = (
            QueryBuilder("reviews r")
            .left_join("reviewers u", "u.id = r.reviewer_id")
            .where_in("r.vendor_id", vendor_ids)
            .order_by("r.vendor_id, r.created_at DESC, r.id")
        )
        sql, params = qb.build_select("""
            r.vendor_id, r.rating, r.created_at, r.verified_purchase,
            COALESCE(u.event_count, 0) AS event_count,
            COALESCE(u.registration_count, 0) AS registration_count
        """)
        result: dict[str, list[dict]] = defaultdict(list)
        for row in self._execute_many(conn, sql, params):
            result[row["vendor_id"]].append({
                "rating": row["rating"],
                "created_at": row["created_at"],
                "verified_purchase": bool(row["verified_purchase"]),
                "reviewer_event_count": row["event_count"],
                "reviewer_registration_count": row["registration_count"],
            })
        return result

    def _load_recent_booking_counts(
        self,
        conn: sqlite3.Connection,
        vendor_ids: list[str],
        now: datetime | None = None,
    ) -> dict[str, int]:
        # Counted back from the caller's reference time, else the repository clock
        cutoff = (now or self._clock()) - timedelta(days=TREND_WINDOW_DAYS)
        qb = (
            QueryBuilder("booking_requests b")
            .where_in("b.vendor_id", vendor_ids)
            .filter_min(to_db_timestamp(cutoff), "b.created_at")
            .group_by("b.vendor_id")
        )
        sql, params = qb.build_select("b.vendor_id, COUNT(*) AS n")
        return {row["vendor_id"]: row["n"] for row in self._execute_many(conn, sql, params)}
