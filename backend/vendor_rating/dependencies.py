"""Database connection and runtime settings for the rating engine."""
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

# Database path - configurable via env var, defaults to vendor_ratings.db next to the package
DB_PATH = Path(os.environ.get("DATABASE_PATH", str(Path(__file__).parent.parent / "vendor_ratings.db")))

# Query timeout in seconds (configurable via environment variable)
DB_QUERY_TIMEOUT = int(os.environ.get("DB_QUERY_TIMEOUT", "30"))

# Worker threads for the batch rating updater (1 = sequential)
BATCH_WORKERS = int(os.environ.get("RATING_BATCH_WORKERS", "4"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def get_db_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory and timeout.

    Connections are opened per call so batch workers never share one.
    """
    conn = sqlite3.connect(str(db_path or DB_PATH), timeout=DB_QUERY_TIMEOUT)
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA busy_timeout = {DB_QUERY_TIMEOUT * 1000}")
    # WAL mode allows concurrent readers while one writer is active
    conn.execute("PRAGMA journal_mode = WAL")
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_db(db_path: str | Path | None = None) -> Generator[sqlite3.Connection, None, None]:
    """Context manager for database connections."""
    conn = get_db_connection(db_path)
    try:
        yield conn
    finally:
        conn.close()


def verify_database_exists(db_path: str | Path | None = None) -> bool:
    """Check if the database file exists."""
    return Path(db_path or DB_PATH).exists()
