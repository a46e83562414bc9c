# Pydantic value types for the rating engine
from .common import RatingPosition, TrendDirection, VerificationStatus
from .vendor import Review, VendorSnapshot
from .rating import CategoryBenchmarks, RatingAdjustments, RatingWeights, WeightedRatingResult
from .ranking import RankingEntry, VendorRankingFactors
from .trend import TrendResult
from .batch import BatchUpdateDetail, BatchUpdateReport
from .stats import CompetitivePosition, ReviewStatistics

__all__ = [
    "RatingPosition",
    "TrendDirection",
    "VerificationStatus",
    "Review",
    "VendorSnapshot",
    "CategoryBenchmarks",
    "RatingAdjustments",
    "RatingWeights",
    "WeightedRatingResult",
    "RankingEntry",
    "VendorRankingFactors",
    "TrendResult",
    "BatchUpdateDetail",
    "BatchUpdateReport",
    "CompetitivePosition",
    "ReviewStatistics",
]
