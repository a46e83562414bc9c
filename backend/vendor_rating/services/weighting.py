"""
Review weighting primitives.

Recency and credibility adjustments are signed deltas: the weighted mean
of the ratings minus their simple mean. A positive delta means the heavier
reviews (newer ones, or ones from more credible reviewers) rate the vendor
higher than the plain average does.
"""
from __future__ import annotations

import math
from datetime import datetime
from typing import Sequence

import numpy as np

from ..config.constants import (
    CONFIDENCE_DISTRIBUTION_WEIGHT,
    CONFIDENCE_LOW_SAMPLE,
    CONFIDENCE_MIN_REVIEWS,
    CONFIDENCE_VOLUME_SATURATION,
    CONFIDENCE_VOLUME_WEIGHT,
    CREDIBILITY_BASE,
    CREDIBILITY_CAP,
    CREDIBILITY_EVENT_STEPS,
    CREDIBILITY_REGISTRATION_STEPS,
    CREDIBILITY_VERIFIED_PURCHASE_BONUS,
    RECENCY_DECAY_DAYS,
    volume_band,
)
from ..errors import InvalidInputError
from ..models import Review
from .base_service import as_utc

SECONDS_PER_DAY = 86_400


def _weighted_delta(ratings: np.ndarray, weights: np.ndarray) -> float:
    total = weights.sum()
    if total <= 0:
        return 0.0
    return float(np.average(ratings, weights=weights) - ratings.mean())


def recency_weight(created_at: datetime, now: datetime) -> float:
    """exp(-days / 90). Future-dated reviews count as written today."""
    days = max(0.0, (now - created_at).total_seconds() / SECONDS_PER_DAY)
    return math.exp(-days / RECENCY_DECAY_DAYS)


def recency_adjustment(reviews: Sequence[Review], now: datetime | None = None) -> float:
    """Recency-weighted mean minus simple mean. 0 for no reviews."""
    if not reviews:
        return 0.0
    now = as_utc(now)
    ratings = np.array([r.rating for r in reviews], dtype=float)
    weights = np.array([recency_weight(r.created_at, now) for r in reviews])
    return _weighted_delta(ratings, weights)


def credibility_score(review: Review) -> float:
    """Reviewer credibility in [1.0, 2.0]."""
    credibility = CREDIBILITY_BASE
    for threshold, bonus in CREDIBILITY_EVENT_STEPS:
        if review.reviewer_event_count > threshold:
            credibility += bonus
    for threshold, bonus in CREDIBILITY_REGISTRATION_STEPS:
        if review.reviewer_registration_count > threshold:
            credibility += bonus
    if review.verified_purchase:
        credibility += CREDIBILITY_VERIFIED_PURCHASE_BONUS
    return min(CREDIBILITY_CAP, credibility)


def credibility_adjustment(reviews: Sequence[Review]) -> float:
    """Credibility-weighted mean minus simple mean. 0 for no reviews."""
    if not reviews:
        return 0.0
    ratings = np.array([r.rating for r in reviews], dtype=float)
    weights = np.array([credibility_score(r) for r in reviews])
    return _weighted_delta(ratings, weights)


def volume_bonus(review_count: int) -> float:
    """Step bonus/penalty by review count."""
    if review_count < 0:
        raise InvalidInputError(f"Review count cannot be negative: {review_count}")
    return volume_band(review_count)


def confidence_score(ratings: Sequence[int]) -> float:
    """
    Confidence in a rating, 0-1.

    0.6 * distribution score (1 - stddev/2, floored at 0) plus
    0.4 * volume score (ln(n+1)/ln(50), capped at 1).
    Fewer than 3 ratings always give 0.3; none give 0.
    """
    n = len(ratings)
    if n == 0:
        return 0.0
    if n < CONFIDENCE_MIN_REVIEWS:
        return CONFIDENCE_LOW_SAMPLE

    std_dev = float(np.std(np.asarray(ratings, dtype=float)))
    distribution_score = max(0.0, 1 - std_dev / 2)
    volume_score = min(1.0, math.log(n + 1) / math.log(CONFIDENCE_VOLUME_SATURATION))
    confidence = (
        distribution_score * CONFIDENCE_DISTRIBUTION_WEIGHT
        + volume_score * CONFIDENCE_VOLUME_WEIGHT
    )
    return min(1.0, max(0.0, confidence))
