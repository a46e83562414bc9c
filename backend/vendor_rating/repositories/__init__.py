"""
Data-access layer for the rating engine.

Services talk to VendorRepository only; SQLiteVendorRepository is the
bundled implementation.
"""
from .base import VendorRepository, snapshot_from_record
from .query_builder import QueryBuilder
from .schema import init_schema
from .sqlite_repository import SQLiteVendorRepository, to_db_timestamp

__all__ = [
    "VendorRepository",
    "snapshot_from_record",
    "QueryBuilder",
    "init_schema",
    "SQLiteVendorRepository",
    "to_db_timestamp",
]
