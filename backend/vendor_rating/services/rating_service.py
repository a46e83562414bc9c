"""
Weighted rating service.

Combines the simple review average with four weighted adjustments:

    weighted = clamp(base + recency*w_r + credibility*w_c
                     + category*w_cat + volume*w_v, 1, 5)

    category = (base - category average) * 0.1   (primary category only)
    volume   = step bonus by review count

Confidence blends rating spread and review volume. Internal math is done at
full precision; ratings are rounded to 1 decimal and adjustments/confidence
to 2 decimals only when the result is built. A vendor without reviews gets
the all-zero result, which is not an error.
"""
from __future__ import annotations

from datetime import datetime

import numpy as np
import structlog

from ..config.constants import CATEGORY_DAMPENING, MAX_WEIGHTED_RATING, MIN_WEIGHTED_RATING
from ..models import RatingAdjustments, RatingWeights, VendorSnapshot, WeightedRatingResult
from ..repositories.base import VendorRepository
from .base_service import BaseService
from .benchmark_service import CategoryBenchmarkService
from .weighting import confidence_score, credibility_adjustment, recency_adjustment, volume_bonus

logger = structlog.get_logger("vendor_rating.services.rating")

DEFAULT_WEIGHTS = RatingWeights()


def no_reviews_result(vendor_id: str | None = None) -> WeightedRatingResult:
    """Sentinel for a vendor with no reviews."""
    return WeightedRatingResult(
        vendor_id=vendor_id,
        weighted_rating=0.0,
        base_rating=0.0,
        adjustments=RatingAdjustments(),
        confidence=0.0,
        review_count=0,
    )


class RatingService(BaseService):
    """Computes weighted ratings from vendor snapshots."""

    def __init__(
        self,
        repository: VendorRepository,
        benchmarks: CategoryBenchmarkService | None = None,
    ):
        super().__init__(repository)
        self.benchmarks = benchmarks or CategoryBenchmarkService(repository)

    def calculate_weighted_rating(
        self,
        snapshot: VendorSnapshot,
        weights: RatingWeights | None = None,
        *,
        now: datetime | None = None,
        run_cache: str | None = None,
    ) -> WeightedRatingResult:
        """Weighted rating and confidence for one vendor snapshot."""
        weights = weights or DEFAULT_WEIGHTS
        reviews = snapshot.reviews
        if not reviews:
            return no_reviews_result(snapshot.vendor_id)

        ratings = [r.rating for r in reviews]
        base_rating = float(np.mean(ratings))

        recency_adj = recency_adjustment(reviews, now)
        credibility_adj = credibility_adjustment(reviews)
        category_adj = self._category_adjustment(snapshot, base_rating, run_cache)
        volume_adj = volume_bonus(len(reviews))

        raw = (
            base_rating
            + recency_adj * weights.recency
            + credibility_adj * weights.credibility
            + category_adj * weights.category
            + volume_adj * weights.volume
        )
        weighted_rating = min(MAX_WEIGHTED_RATING, max(MIN_WEIGHTED_RATING, raw))
        confidence = confidence_score(ratings)

        return WeightedRatingResult(
            vendor_id=snapshot.vendor_id,
            weighted_rating=round(weighted_rating, 1),
            base_rating=round(base_rating, 1),
            adjustments=RatingAdjustments(
                recency=round(recency_adj, 2),
                credibility=round(credibility_adj, 2),
                category=round(category_adj, 2),
                volume=round(volume_adj, 2),
            ),
            confidence=round(confidence, 2),
            review_count=len(reviews),
        )

    def calculate_weighted_rating_for(
        self,
        vendor_id: str,
        weights: RatingWeights | None = None,
        *,
        now: datetime | None = None,
    ) -> WeightedRatingResult:
        """Load a vendor and compute its weighted rating. Raises NotFoundError."""
        snapshot = self.repository.load_vendor_snapshot(vendor_id)
        return self.calculate_weighted_rating(snapshot, weights, now=now)

    def _category_adjustment(self, snapshot: VendorSnapshot, base_rating: float, run_cache: str | None) -> float:
        # Only the first listed category counts as primary
        category = snapshot.primary_category
        if category is None:
            return 0.0
        benchmarks = self.benchmarks.get_category_benchmarks(category, run_cache)
        return (base_rating - benchmarks.average_rating) * CATEGORY_DAMPENING
