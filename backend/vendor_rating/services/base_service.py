"""
BaseService: common plumbing for the rating domain services.

Every service receives the data-access repository at construction time
and loads category peers through the same optional per-run cache.
"""
from __future__ import annotations

import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator

import structlog

from ..cache import app_cache
from ..models import VendorSnapshot
from ..repositories.base import VendorRepository

logger = structlog.get_logger("vendor_rating.services")

PEER_CACHE_MAXSIZE = 256
PEER_CACHE_TTL = 300


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime:
    """Return value as an aware UTC datetime, defaulting to now."""
    if value is None:
        return utcnow()
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class BaseService:
    """Base class for domain services."""

    def __init__(self, repository: VendorRepository):
        self.repository = repository

    def _category_peers(self, category: str, run_cache: str | None = None) -> list[VendorSnapshot]:
        """Load verified peers of a category, memoised within a run when run_cache is given."""
        if run_cache is None:
            return self.repository.load_category_peers(category)
        return app_cache.get_or_load(
            run_cache,
            category,
            lambda: self.repository.load_category_peers(category),
            maxsize=PEER_CACHE_MAXSIZE,
            ttl=PEER_CACHE_TTL,
        )

    @contextmanager
    def _run_cache(self, prefix: str) -> Generator[str, None, None]:
        """Yield a cache name private to one ranking or trend run."""
        name = f"{prefix}:{uuid.uuid4().hex[:8]}"
        try:
            yield name
        finally:
            app_cache.drop(name)
