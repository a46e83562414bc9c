"""
Centralized constants for the vendor rating engine.

Every tunable number used by the weighting, benchmark, ranking and trend
services lives here. Import from here instead of redefining.
"""

# =============================================================================
# WEIGHTED RATING
# =============================================================================

# Default adjustment weights (each 0-1)
DEFAULT_RATING_WEIGHTS = {
    'recency': 0.3,
    'credibility': 0.2,
    'category': 0.3,
    'volume': 0.2,
}

MIN_WEIGHTED_RATING = 1.0
MAX_WEIGHTED_RATING = 5.0

# Recency decay: w = exp(-days / RECENCY_DECAY_DAYS)
RECENCY_DECAY_DAYS = 90

# Reviewer credibility steps: (threshold, bonus); bonus applies when count > threshold
CREDIBILITY_BASE = 1.0
CREDIBILITY_EVENT_STEPS = ((5, 0.2), (10, 0.2))
CREDIBILITY_REGISTRATION_STEPS = ((10, 0.1), (25, 0.1))
CREDIBILITY_VERIFIED_PURCHASE_BONUS = 0.3
CREDIBILITY_CAP = 2.0

# Pull toward category average (10% of the difference)
CATEGORY_DAMPENING = 0.1

# Volume bonus bands: (exclusive upper bound, bonus)
VOLUME_BONUS_BANDS = (
    (5, -0.2),    # very few reviews
    (10, 0.0),    # neutral
    (25, 0.1),    # small bonus
    (50, 0.2),    # medium bonus
)
VOLUME_BONUS_MAX = 0.3

# Confidence score
CONFIDENCE_MIN_REVIEWS = 3
CONFIDENCE_LOW_SAMPLE = 0.3
CONFIDENCE_DISTRIBUTION_WEIGHT = 0.6
CONFIDENCE_VOLUME_WEIGHT = 0.4
CONFIDENCE_VOLUME_SATURATION = 50

# =============================================================================
# CATEGORY BENCHMARKS
# =============================================================================

# Returned when a category has no verified, reviewed vendors
DEFAULT_CATEGORY_BENCHMARKS = {
    'average_rating': 4.0,
    'average_review_count': 10.0,
    'average_completion_rate': 95.0,
    'average_response_time': 24.0,
}

# =============================================================================
# RANKING (overall score, 0-100)
# =============================================================================

SCORE_RATING_MAX = 40
SCORE_VOLUME_CAP = 20
SCORE_VOLUME_LOG_FACTOR = 5
SCORE_VERIFICATION_BONUS = 10
SCORE_COMPLETION_MAX = 15
SCORE_RESPONSE_MAX = 10
SCORE_RESPONSE_WINDOW_HOURS = 24
SCORE_CATEGORY_RANK_MAX = 5
SCORE_CATEGORY_RANK_DIVISOR = 10

DEFAULT_RANKING_LIMIT = 50

# =============================================================================
# TRENDS
# =============================================================================

TREND_WINDOW_DAYS = 30
TREND_CHANGE_THRESHOLD = 0.1   # 10% change before a trend is up/down

TREND_RATING_MULTIPLIER = 20
TREND_RATING_UP_BONUS = 10
TREND_BOOKING_UP_BONUS = 15
TREND_ACTIVITY_PER_REVIEW = 2
TREND_ACTIVITY_CAP = 10

DEFAULT_TRENDING_LIMIT = 10

# =============================================================================
# COMPETITIVE POSITION
# =============================================================================

RATING_POSITION_MARGIN = 0.2


def volume_band(review_count: int) -> float:
    """Return the volume bonus for a review count.

    Args:
        review_count: Number of reviews (>= 0)
    """
    for upper, bonus in VOLUME_BONUS_BANDS:
        if review_count < upper:
            return bonus
    return VOLUME_BONUS_MAX
