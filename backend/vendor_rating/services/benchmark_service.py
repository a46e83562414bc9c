"""
Category benchmark service.

Averages rating, review count, completion rate and response time over the
verified, reviewed vendors of a category. An empty category falls back to
fixed defaults instead of failing.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np
import structlog

from ..config.constants import DEFAULT_CATEGORY_BENCHMARKS
from ..models import CategoryBenchmarks, VendorSnapshot
from .base_service import BaseService

logger = structlog.get_logger("vendor_rating.services.benchmark")


def compute_benchmarks(category: str | None, peers: Sequence[VendorSnapshot]) -> CategoryBenchmarks:
    """Benchmarks over peers that are verified and have at least one review."""
    eligible = [p for p in peers if p.is_verified and p.review_count > 0]
    if not eligible:
        return CategoryBenchmarks(category=category, peer_count=0, **DEFAULT_CATEGORY_BENCHMARKS)

    return CategoryBenchmarks(
        category=category,
        average_rating=float(np.mean([p.rating for p in eligible])),
        average_review_count=float(np.mean([p.review_count for p in eligible])),
        average_completion_rate=float(np.mean([p.completion_rate for p in eligible])),
        average_response_time=float(np.mean([p.response_time_hours for p in eligible])),
        peer_count=len(eligible),
    )


class CategoryBenchmarkService(BaseService):
    """Category-wide averages used by the rating and ranking services."""

    def get_category_benchmarks(self, category: str, run_cache: str | None = None) -> CategoryBenchmarks:
        peers = self._category_peers(category, run_cache)
        benchmarks = compute_benchmarks(category, peers)
        if benchmarks.peer_count == 0:
            logger.debug("category_benchmark_defaults", category=category)
        return benchmarks
