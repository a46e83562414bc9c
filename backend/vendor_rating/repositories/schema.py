"""
SQLite schema for the reference vendor repository.

Tables:
    vendors            one row per vendor profile (stored rating lives here)
    vendor_categories  ordered service categories; position 0 is primary
    reviewers          activity facts used for credibility weighting
    reviews            star ratings
    booking_requests   booking activity used by the trend analyzer
"""
import sqlite3

SCHEMA_DDL = """
CREATE TABLE IF NOT EXISTS vendors (
    id TEXT PRIMARY KEY,
    business_name TEXT NOT NULL DEFAULT '',
    verification_status TEXT NOT NULL DEFAULT 'PENDING',  -- VERIFIED, PENDING, REJECTED
    rating REAL NOT NULL DEFAULT 0.0,                     -- stored lifetime rating (0-5)
    review_count INTEGER NOT NULL DEFAULT 0,
    completion_rate REAL NOT NULL DEFAULT 0.0,            -- 0-100
    response_time_hours REAL NOT NULL DEFAULT 0.0,
    city TEXT,
    rating_updated_at TIMESTAMP
);

CREATE TABLE IF NOT EXISTS vendor_categories (
    vendor_id TEXT NOT NULL,
    category TEXT NOT NULL,
    position INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (vendor_id, category),
    FOREIGN KEY (vendor_id) REFERENCES vendors(id)
);

CREATE TABLE IF NOT EXISTS reviewers (
    id TEXT PRIMARY KEY,
    event_count INTEGER NOT NULL DEFAULT 0,
    registration_count INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS reviews (
    id INTEGER PRIMARY KEY,
    vendor_id TEXT NOT NULL,
    reviewer_id TEXT,
    rating INTEGER NOT NULL,
    verified_purchase INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP NOT NULL,                        -- ISO-8601, UTC
    FOREIGN KEY (vendor_id) REFERENCES vendors(id),
    FOREIGN KEY (reviewer_id) REFERENCES reviewers(id)
);

CREATE TABLE IF NOT EXISTS booking_requests (
    id INTEGER PRIMARY KEY,
    vendor_id TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'PENDING',
    created_at TIMESTAMP NOT NULL,
    FOREIGN KEY (vendor_id) REFERENCES vendors(id)
);

CREATE INDEX IF NOT EXISTS idx_vendors_status ON vendors(verification_status);
CREATE INDEX IF NOT EXISTS idx_vendor_categories_category ON vendor_categories(category);
CREATE INDEX IF NOT EXISTS idx_reviews_vendor ON reviews(vendor_id, created_at);
CREATE INDEX IF NOT EXISTS idx_bookings_vendor ON booking_requests(vendor_id, created_at);
"""


def init_schema(conn: sqlite3.Connection) -> None:
    """Create all tables and indexes if they do not exist."""
    conn.executescript(SCHEMA_DDL)
    conn.commit()
