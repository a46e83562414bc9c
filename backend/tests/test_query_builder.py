"""
Unit tests for QueryBuilder.
"""
from vendor_rating.repositories import QueryBuilder


class TestQueryBuilderInit:
    """Test QueryBuilder construction."""

    def test_basic_construction(self):
        """QueryBuilder should accept a base table."""
        qb = QueryBuilder("vendors v")
        assert qb.base_table == "vendors v"
        assert qb._conditions == []
        assert qb._params == []
        assert qb._joins == []

    def test_build_select_no_conditions(self):
        qb = QueryBuilder("vendors v")
        sql, params = qb.build_select("v.id, v.rating")
        assert sql == "SELECT v.id, v.rating FROM vendors v"
        assert params == []


class TestQueryBuilderFilters:
    """Test domain-specific filter methods."""

    def test_filter_verified(self):
        """filter_verified adds a parameterized status check."""
        sql, params = QueryBuilder("vendors v").filter_verified(True).build_select("*")
        assert "v.verification_status = ?" in sql
        assert params == ["VERIFIED"]

    def test_filter_verified_false_is_noop(self):
        sql, params = QueryBuilder("vendors v").filter_verified(False).build_select("*")
        assert "WHERE" not in sql
        assert params == []

    def test_filter_category_uses_exists(self):
        """Category matches any listed position, not just the primary one."""
        sql, params = QueryBuilder("vendors v").filter_category("CATERING").build_select("*")
        assert "EXISTS (SELECT 1 FROM vendor_categories vc" in sql
        assert "vc.vendor_id = v.id" in sql
        assert params == ["CATERING"]

    def test_filter_category_none_is_noop(self):
        sql, params = QueryBuilder("vendors v").filter_category(None).build_select("*")
        assert "WHERE" not in sql
        assert params == []

    def test_filter_city_exact(self):
        sql, params = QueryBuilder("vendors v").filter_city("Austin").build_select("*")
        assert "v.city = ?" in sql
        assert "LOWER" not in sql
        assert params == ["Austin"]

    def test_filter_min_zero_is_applied(self):
        """filter_min(0) is a real bound, not a no-op."""
        sql, params = QueryBuilder("reviews r").filter_min(0, "r.rating").build_select("*")
        assert "r.rating >= ?" in sql
        assert params == [0]

    def test_where_in(self):
        sql, params = QueryBuilder("reviews r").where_in("r.vendor_id", ["a", "b"]).build_select("*")
        assert "r.vendor_id IN (?, ?)" in sql
        assert params == ["a", "b"]

    def test_where_in_empty_matches_nothing(self):
        sql, params = QueryBuilder("reviews r").where_in("r.vendor_id", []).build_select("*")
        assert "0 = 1" in sql
        assert params == []


class TestQueryBuilderComposition:
    """Test clause ordering when chaining."""

    def test_full_query_order(self):
        qb = (
            QueryBuilder("reviews r")
            .left_join("reviewers u", "u.id = r.reviewer_id")
            .where("r.vendor_id = ?", "v1")
            .group_by("r.vendor_id")
            .order_by("r.vendor_id")
        )
        sql, params = qb.build_select("r.vendor_id, COUNT(*)")
        assert sql == (
            "SELECT r.vendor_id, COUNT(*) FROM reviews r "
            "LEFT JOIN reviewers u ON u.id = r.reviewer_id "
            "WHERE r.vendor_id = ? GROUP BY r.vendor_id ORDER BY r.vendor_id"
        )
        assert params == ["v1"]

    def test_conditions_joined_with_and(self):
        qb = QueryBuilder("vendors v").filter_verified(True).filter_city("Dallas")
        sql, params = qb.build_select("v.id")
        assert " AND " in sql
        assert params == ["VERIFIED", "Dallas"]

    def test_build_returns_param_copy(self):
        qb = QueryBuilder("vendors v").where("v.id = ?", "x")
        _, params = qb.build_select("*")
        params.append("y")
        assert qb.build_select("*")[1] == ["x"]
