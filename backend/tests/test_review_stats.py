"""
Tests for review statistics and competitive position.
"""
import pytest

from vendor_rating.errors import NotFoundError
from vendor_rating.models import RatingPosition
from vendor_rating.services import ReviewStatsService
from vendor_rating.services.review_stats_service import rating_position, summarize_reviews

from factories import make_review, make_vendor


class TestRatingPosition:
    """Test the 0.2 margin."""

    @pytest.mark.parametrize("rating,average,expected", [
        (4.5, 4.0, RatingPosition.ABOVE_AVERAGE),
        (4.1, 4.0, RatingPosition.AVERAGE),
        (3.9, 4.0, RatingPosition.AVERAGE),
        (3.5, 4.0, RatingPosition.BELOW_AVERAGE),
    ])
    def test_position(self, rating, average, expected):
        assert rating_position(rating, average) == expected


class TestSummarizeReviews:
    """Test the pure summary."""

    def test_empty(self):
        stats = summarize_reviews(make_vendor("v1"))
        assert stats.total_reviews == 0
        assert stats.average_rating == 0.0
        assert stats.rating_distribution == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}

    def test_verified_share(self):
        vendor = make_vendor("v1", reviews=[make_review(5, verified=True), make_review(2), make_review(2)])
        stats = summarize_reviews(vendor)
        assert stats.verified_purchase_pct == 33.3
        assert stats.average_rating == 3.0
        assert stats.rating_distribution[2] == 2


class TestReviewStatsService:
    """Test against the seeded SQLite marketplace."""

    def test_review_statistics(self, sqlite_repo):
        stats = ReviewStatsService(sqlite_repo).get_review_statistics("v-alpha")
        assert stats.total_reviews == 3
        assert stats.average_rating == 4.7
        assert stats.rating_distribution == {1: 0, 2: 0, 3: 0, 4: 1, 5: 2}
        assert stats.verified_purchase_pct == 33.3

    def test_unknown_vendor(self, sqlite_repo):
        with pytest.raises(NotFoundError):
            ReviewStatsService(sqlite_repo).get_review_statistics("nope")

    def test_competitive_position_leader(self, sqlite_repo):
        position = ReviewStatsService(sqlite_repo).get_competitive_position("v-alpha")
        assert position.category == "CATERING"
        assert position.category_average_rating == 4.15
        assert position.rating_position == RatingPosition.ABOVE_AVERAGE
        assert position.market_rank == 1
        assert position.total_competitors == 1

    def test_competitive_position_alone_in_category(self, sqlite_repo):
        position = ReviewStatsService(sqlite_repo).get_competitive_position("v-beta")
        assert position.category == "AUDIO_VISUAL"
        assert position.rating_position == RatingPosition.AVERAGE
        assert position.market_rank == 1
        assert position.total_competitors == 0

    def test_competitive_position_unreviewed_vendor(self, sqlite_repo):
        position = ReviewStatsService(sqlite_repo).get_competitive_position("v-delta")
        assert position.category_average_rating == 4.5
        assert position.rating_position == RatingPosition.BELOW_AVERAGE
        assert position.market_rank == 2
