"""
Service layer for the vendor rating engine.

Each service takes a VendorRepository; callers build them once and reuse.
"""
from .base_service import BaseService
from .benchmark_service import CategoryBenchmarkService, compute_benchmarks
from .rating_service import RatingService, no_reviews_result
from .ranking_service import RankingService, calculate_overall_score, category_rank
from .trend_service import TrendService, analyze_trend, classify_trend
from .batch_service import BatchRatingUpdater
from .review_stats_service import ReviewStatsService
from .weighting import (
    confidence_score,
    credibility_adjustment,
    credibility_score,
    recency_adjustment,
    volume_bonus,
)

__all__ = [
    "BaseService",
    "CategoryBenchmarkService",
    "compute_benchmarks",
    "RatingService",
    "no_reviews_result",
    "RankingService",
    "calculate_overall_score",
    "category_rank",
    "TrendService",
    "analyze_trend",
    "classify_trend",
    "BatchRatingUpdater",
    "ReviewStatsService",
    "confidence_score",
    "credibility_adjustment",
    "credibility_score",
    "recency_adjustment",
    "volume_bonus",
]
