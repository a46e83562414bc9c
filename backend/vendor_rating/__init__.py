# Vendor rating & ranking engine
"""
Turns raw review records into a weighted rating per vendor, benchmarks
vendors against category peers, ranks them for discovery, and flags
vendors whose recent performance is trending.

Entry points:
- RatingService.calculate_weighted_rating
- CategoryBenchmarkService.get_category_benchmarks
- RankingService.rank_vendors
- TrendService.get_trending_vendors
- BatchRatingUpdater.update_all_vendor_ratings
- ReviewStatsService.get_review_statistics / get_competitive_position
"""
