"""
Pytest fixtures for rating engine tests.
"""
from datetime import timedelta

import pytest

from vendor_rating.dependencies import get_db
from vendor_rating.repositories import SQLiteVendorRepository, init_schema, to_db_timestamp

from factories import NOW


@pytest.fixture
def db_path(tmp_path):
    """SQLite file seeded with a small marketplace."""
    path = tmp_path / "vendors.db"
    with get_db(path) as conn:
        init_schema(conn)
        conn.executemany(
            "INSERT INTO vendors (id, business_name, verification_status, rating, review_count,"
            " completion_rate, response_time_hours, city) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            [
                ("v-alpha", "Alpha Catering", "VERIFIED", 4.5, 3, 98.0, 2.0, "Austin"),
                ("v-beta", "Beta Sound", "VERIFIED", 3.8, 2, 90.0, 12.0, "Austin"),
                ("v-gamma", "Gamma Photo", "PENDING", 4.9, 1, 100.0, 1.0, "Dallas"),
                ("v-delta", "Delta Decor", "VERIFIED", 0.0, 0, 0.0, 0.0, "Dallas"),
            ],
        )
        conn.executemany(
            "INSERT INTO vendor_categories (vendor_id, category, position) VALUES (?, ?, ?)",
            [
                ("v-alpha", "CATERING", 0),
                ("v-alpha", "DECORATION", 1),
                ("v-beta", "AUDIO_VISUAL", 0),
                ("v-beta", "CATERING", 1),
                ("v-gamma", "PHOTOGRAPHY", 0),
                ("v-delta", "DECORATION", 0),
            ],
        )
        conn.executemany(
            "INSERT INTO reviewers (id, event_count, registration_count) VALUES (?, ?, ?)",
            [("org-1", 12, 30), ("org-2", 0, 0)],
        )
        conn.executemany(
            "INSERT INTO reviews (vendor_id, reviewer_id, rating, verified_purchase, created_at)"
            " VALUES (?, ?, ?, ?, ?)",
            [
                ("v-alpha", "org-1", 5, 1, to_db_timestamp(NOW - timedelta(days=2))),
                ("v-alpha", "org-2", 4, 0, to_db_timestamp(NOW - timedelta(days=40))),
                ("v-alpha", None, 5, 0, to_db_timestamp(NOW - timedelta(days=100))),
                ("v-beta", "org-2", 4, 0, to_db_timestamp(NOW - timedelta(days=5))),
                ("v-beta", "org-2", 3, 0, to_db_timestamp(NOW - timedelta(days=60))),
                ("v-gamma", "org-1", 5, 1, to_db_timestamp(NOW - timedelta(days=1))),
            ],
        )
        conn.executemany(
            "INSERT INTO booking_requests (vendor_id, status, created_at) VALUES (?, ?, ?)",
            [
                ("v-alpha", "CONFIRMED", to_db_timestamp(NOW - timedelta(days=3))),
                ("v-alpha", "PENDING", to_db_timestamp(NOW - timedelta(days=10))),
                ("v-alpha", "CONFIRMED", to_db_timestamp(NOW - timedelta(days=90))),
                ("v-beta", "PENDING", to_db_timestamp(NOW - timedelta(days=45))),
            ],
        )
        conn.commit()
    return path


@pytest.fixture
def sqlite_repo(db_path):
    return SQLiteVendorRepository(db_path, clock=lambda: NOW)
