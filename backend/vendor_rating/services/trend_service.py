"""
Trend analysis service.

Splits each vendor's reviews at now - 30 days and compares the two windows:

    rating trend   recent mean rating vs older mean rating
    booking trend  bookings in the window vs reviews before it
    trend score    recent_rating*20 + 10[rating up] + 15[booking up]
                   + min(10, recent_reviews*2)

Only verified vendors with at least one review inside the window qualify.
"""
from __future__ import annotations

from datetime import datetime, timedelta

import numpy as np
import structlog

from ..config.constants import (
    DEFAULT_TRENDING_LIMIT,
    TREND_ACTIVITY_CAP,
    TREND_ACTIVITY_PER_REVIEW,
    TREND_BOOKING_UP_BONUS,
    TREND_CHANGE_THRESHOLD,
    TREND_RATING_MULTIPLIER,
    TREND_RATING_UP_BONUS,
    TREND_WINDOW_DAYS,
)
from ..errors import InvalidInputError
from ..models import TrendDirection, TrendResult, VendorSnapshot
from .base_service import BaseService, as_utc

logger = structlog.get_logger("vendor_rating.services.trend")


def classify_trend(current: float, previous: float) -> TrendDirection:
    """
    up/down when the relative change is at least 10%, else stable.

    With no previous baseline (previous <= 0) any current activity is up.
    """
    if previous <= 0:
        return TrendDirection.up if current > 0 else TrendDirection.stable
    change = (current - previous) / previous
    if abs(change) < TREND_CHANGE_THRESHOLD:
        return TrendDirection.stable
    return TrendDirection.up if change > 0 else TrendDirection.down


def calculate_trend_score(
    recent_rating: float,
    rating_trend: TrendDirection,
    booking_trend: TrendDirection,
    recent_review_count: int,
) -> float:
    score = recent_rating * TREND_RATING_MULTIPLIER
    if rating_trend == TrendDirection.up:
        score += TREND_RATING_UP_BONUS
    if booking_trend == TrendDirection.up:
        score += TREND_BOOKING_UP_BONUS
    score += min(TREND_ACTIVITY_CAP, recent_review_count * TREND_ACTIVITY_PER_REVIEW)
    return round(score, 1)


def analyze_trend(snapshot: VendorSnapshot, now: datetime | None = None) -> TrendResult | None:
    """Trend for one vendor, or None when it has no review inside the window."""
    cutoff = as_utc(now) - timedelta(days=TREND_WINDOW_DAYS)
    recent = [r.rating for r in snapshot.reviews if r.created_at >= cutoff]
    if not recent:
        return None
    older = [r.rating for r in snapshot.reviews if r.created_at < cutoff]

    recent_rating = float(np.mean(recent))
    older_rating = float(np.mean(older)) if older else snapshot.rating

    rating_trend = classify_trend(recent_rating, older_rating)
    booking_trend = classify_trend(
        snapshot.recent_booking_count,
        snapshot.review_count - len(recent),
    )

    return TrendResult(
        vendor_id=snapshot.vendor_id,
        business_name=snapshot.business_name,
        trend_score=calculate_trend_score(recent_rating, rating_trend, booking_trend, len(recent)),
        recent_rating=round(recent_rating, 1),
        rating_trend=rating_trend,
        booking_trend=booking_trend,
        recent_review_count=len(recent),
    )


class TrendService(BaseService):
    """Surfaces vendors whose recent performance stands out."""

    def get_trending_vendors(
        self,
        category: str | None = None,
        limit: int = DEFAULT_TRENDING_LIMIT,
        *,
        now: datetime | None = None,
    ) -> list[TrendResult]:
        """Trending vendors sorted by trend score (desc), at most `limit`."""
        if limit < 1:
            raise InvalidInputError(f"limit must be >= 1, got {limit}", details={"limit": limit})

        now = as_utc(now)
        candidates = self.repository.load_candidates(category, verified_only=True, now=now)
        results = [r for r in (analyze_trend(s, now) for s in candidates) if r is not None]
        results.sort(key=lambda r: -r.trend_score)

        logger.info("trending_vendors_computed", category=category, qualifying=len(results))
        return results[:limit]
