"""
Review statistics and competitive position.

Descriptive figures for a vendor page: rating distribution and verified
purchase share, plus how the stored rating compares to the primary
category benchmark and where the vendor sits in its market.
"""
from __future__ import annotations

import math

import numpy as np
import structlog

from ..config.constants import RATING_POSITION_MARGIN
from ..models import CompetitivePosition, RatingPosition, ReviewStatistics, VendorSnapshot
from ..repositories.base import VendorRepository
from .base_service import BaseService
from .benchmark_service import CategoryBenchmarkService, compute_benchmarks

logger = structlog.get_logger("vendor_rating.services.review_stats")


def summarize_reviews(snapshot: VendorSnapshot) -> ReviewStatistics:
    distribution = {star: 0 for star in range(1, 6)}
    for review in snapshot.reviews:
        distribution[review.rating] += 1

    total = len(snapshot.reviews)
    if total == 0:
        return ReviewStatistics(vendor_id=snapshot.vendor_id, rating_distribution=distribution)

    verified = sum(1 for r in snapshot.reviews if r.verified_purchase)
    return ReviewStatistics(
        vendor_id=snapshot.vendor_id,
        total_reviews=total,
        average_rating=round(float(np.mean([r.rating for r in snapshot.reviews])), 1),
        rating_distribution=distribution,
        verified_purchase_pct=round(verified * 100.0 / total, 1),
    )


def rating_position(vendor_rating: float, category_average: float) -> RatingPosition:
    """ABOVE/BELOW_AVERAGE beyond a 0.2 margin, else AVERAGE."""
    diff = vendor_rating - category_average
    if diff > RATING_POSITION_MARGIN:
        return RatingPosition.ABOVE_AVERAGE
    if diff < -RATING_POSITION_MARGIN:
        return RatingPosition.BELOW_AVERAGE
    return RatingPosition.AVERAGE


def market_strength(snapshot: VendorSnapshot) -> float:
    return snapshot.rating * math.log(snapshot.review_count + 1)


class ReviewStatsService(BaseService):
    """Per-vendor review statistics and market comparison."""

    def __init__(self, repository: VendorRepository, benchmarks: CategoryBenchmarkService | None = None):
        super().__init__(repository)
        self.benchmarks = benchmarks or CategoryBenchmarkService(repository)

    def get_review_statistics(self, vendor_id: str) -> ReviewStatistics:
        """Raises NotFoundError for an unknown vendor."""
        return summarize_reviews(self.repository.load_vendor_snapshot(vendor_id))

    def get_competitive_position(self, vendor_id: str) -> CompetitivePosition:
        """Compare a vendor's stored rating with its primary category."""
        snapshot = self.repository.load_vendor_snapshot(vendor_id)
        category = snapshot.primary_category
        peers = self._category_peers(category) if category else []

        benchmarks = compute_benchmarks(category, peers)
        competitors = [p for p in peers if p.vendor_id != vendor_id]
        contenders = sorted([snapshot, *competitors], key=lambda p: -market_strength(p))
        market_rank = next(i for i, p in enumerate(contenders, start=1) if p.vendor_id == vendor_id)

        return CompetitivePosition(
            vendor_id=vendor_id,
            category=category,
            vendor_rating=snapshot.rating,
            category_average_rating=round(benchmarks.average_rating, 2),
            rating_position=rating_position(snapshot.rating, benchmarks.average_rating),
            market_rank=market_rank,
            total_competitors=len(competitors),
        )
