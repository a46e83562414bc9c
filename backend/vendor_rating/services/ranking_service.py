"""
Discovery ranking service.

Overall score (0-100), each term capped on its own before summing:

    rating         (rating / 5) * 40
    volume         min(20, ln(review_count + 1) * 5)
    verification   +10 when VERIFIED
    completion     (completion_rate / 100) * 15
    response       max(0, 10 - (response_hours / 24) * 10)
    category rank  max(0, 5 - category_rank / 10)

Weighted ratings are recomputed for every candidate on every call. Ranks are
assigned only after the full candidate set is sorted.
"""
from __future__ import annotations

import math
from datetime import datetime
from typing import Sequence

import structlog

from ..config.constants import (
    DEFAULT_RANKING_LIMIT,
    SCORE_CATEGORY_RANK_DIVISOR,
    SCORE_CATEGORY_RANK_MAX,
    SCORE_COMPLETION_MAX,
    SCORE_RATING_MAX,
    SCORE_RESPONSE_MAX,
    SCORE_RESPONSE_WINDOW_HOURS,
    SCORE_VERIFICATION_BONUS,
    SCORE_VOLUME_CAP,
    SCORE_VOLUME_LOG_FACTOR,
)
from ..errors import InvalidInputError
from ..models import RankingEntry, VendorRankingFactors, VendorSnapshot, VerificationStatus
from ..repositories.base import VendorRepository
from .base_service import BaseService, as_utc
from .rating_service import RatingService

logger = structlog.get_logger("vendor_rating.services.ranking")


def calculate_overall_score(factors: VendorRankingFactors) -> float:
    """Composite discovery score rounded to 1 decimal."""
    score = (factors.rating / 5) * SCORE_RATING_MAX
    score += min(SCORE_VOLUME_CAP, math.log(factors.review_count + 1) * SCORE_VOLUME_LOG_FACTOR)
    if factors.verification_status == VerificationStatus.VERIFIED:
        score += SCORE_VERIFICATION_BONUS
    score += (factors.completion_rate / 100) * SCORE_COMPLETION_MAX
    score += max(0.0, SCORE_RESPONSE_MAX - (factors.response_time_hours / SCORE_RESPONSE_WINDOW_HOURS) * SCORE_RESPONSE_MAX)
    score += max(0.0, SCORE_CATEGORY_RANK_MAX - factors.category_rank / SCORE_CATEGORY_RANK_DIVISOR)
    return round(score, 1)


def category_rank(vendor_id: str, peers: Sequence[VendorSnapshot]) -> int:
    """1-based position among peers by (rating desc, review_count desc).

    Equal peers keep their input order. A vendor missing from peers ranks
    just after the last one.
    """
    ordered = sorted(peers, key=lambda p: (-p.rating, -p.review_count))
    for position, peer in enumerate(ordered, start=1):
        if peer.vendor_id == vendor_id:
            return position
    return len(ordered) + 1


class RankingService(BaseService):
    """Ranks verified vendors for discovery."""

    def __init__(self, repository: VendorRepository, ratings: RatingService | None = None):
        super().__init__(repository)
        self.ratings = ratings or RatingService(repository)

    def rank_vendors(
        self,
        category: str | None = None,
        location: str | None = None,
        limit: int = DEFAULT_RANKING_LIMIT,
        *,
        now: datetime | None = None,
    ) -> list[RankingEntry]:
        """
        Rank verified vendors matching the optional category and city.

        Returns at most `limit` entries sorted by overall score (desc).
        Ranks are dense 1..N over the whole candidate set; ties keep
        candidate order.
        """
        if limit < 1:
            raise InvalidInputError(f"limit must be >= 1, got {limit}", details={"limit": limit})

        # One reference time for every candidate in the run
        now = as_utc(now)
        candidates = self.repository.load_candidates(category, location, verified_only=True, now=now)
        with self._run_cache("ranking") as run_cache:
            scored = [self._score_candidate(snapshot, now, run_cache) for snapshot in candidates]

        # sorted() is stable: equal scores keep candidate order
        scored.sort(key=lambda item: -item[2])
        entries = [
            RankingEntry(
                vendor_id=snapshot.vendor_id,
                business_name=snapshot.business_name,
                overall_score=score,
                rank=position,
                factors=factors,
            )
            for position, (snapshot, factors, score) in enumerate(scored, start=1)
        ]

        logger.info(
            "vendors_ranked",
            category=category,
            location=location,
            candidates=len(entries),
            returned=min(limit, len(entries)),
        )
        return entries[:limit]

    def _score_candidate(
        self,
        snapshot: VendorSnapshot,
        now: datetime | None,
        run_cache: str,
    ) -> tuple[VendorSnapshot, VendorRankingFactors, float]:
        result = self.ratings.calculate_weighted_rating(snapshot, now=now, run_cache=run_cache)
        primary = snapshot.primary_category
        peers = self._category_peers(primary, run_cache) if primary else []
        factors = VendorRankingFactors(
            rating=result.weighted_rating,
            review_count=snapshot.review_count,
            verification_status=snapshot.verification_status,
            completion_rate=snapshot.completion_rate,
            response_time_hours=snapshot.response_time_hours,
            category_rank=category_rank(snapshot.vendor_id, peers),
        )
        return snapshot, factors, calculate_overall_score(factors)
